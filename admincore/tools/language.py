"""Parsing of HTTP Accept-Language headers."""

from __future__ import annotations

from typing import Iterable


def _parse_quality(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        return 1.0
    try:
        return float(text)
    except ValueError:
        return 1.0


def parse_accept_language(
    languages: str, supported_languages: Iterable[str] | None = None
) -> list[str]:
    """Return the language codes of ``languages`` ordered by quality.

    Entries without a usable quality rank by their position. When
    ``supported_languages`` is given, only codes found in it are kept.
    """
    supported = list(supported_languages or ())
    entries = languages.split(",")
    ranked: list[tuple[str, float]] = []
    for position, raw in enumerate(entries):
        entry = raw.strip().lower()
        if not entry:
            continue
        name, sep, params = entry.partition(";")
        if supported and name not in supported:
            continue
        quality = 0.0
        if sep and params.startswith("q="):
            quality = _parse_quality(params[2:])
        if quality == 0:
            quality = float(len(entries) - position)
        ranked.append((name, quality))
    ranked.sort(key=lambda item: item[1], reverse=True)
    return [name for name, _ in ranked]