"""Spreadsheet column naming."""

from __future__ import annotations

from string import ascii_uppercase


def convert_num_to_chars(num: int) -> str:
    """Return the spreadsheet column letters for the zero-based index ``num``.

    Index 0 is ``A``, 25 is ``Z`` and 26 is ``AA``. Negative indexes give an
    empty string.
    """
    letters = ""
    remaining = num + 1
    while remaining > 0:
        digit = remaining % 26 or 26
        remaining = (remaining - digit) // 26
        letters = ascii_uppercase[digit - 1] + letters
    return letters