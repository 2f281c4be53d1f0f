"""Building SQL search conditions from annotated query dataclasses."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field, is_dataclass
from typing import Any

FROM_QUERY_TAG = "search"
MYSQL = "mysql"
POSTGRES = "postgres"

_COMPARISONS = {
    "exact": "=",
    "iexact": "=",
    "gt": ">",
    "gte": ">=",
    "lt": "<",
    "lte": "<=",
}

_PATTERNS = {
    "contains": "%{}%",
    "icontains": "%{}%",
    "startswith": "{}%",
    "istartswith": "{}%",
    "endswith": "%{}",
    "iendswith": "%{}",
}


@dataclass
class Condition:
    """Collected where, or, order and join clauses."""

    where: dict[str, list[Any]] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)
    or_: dict[str, list[Any]] = field(default_factory=dict)
    joins: list[JoinCondition] = field(default_factory=list)

    def set_where(self, key: str, values: list[Any]) -> None:
        self.where[key] = values

    def set_or(self, key: str, values: list[Any]) -> None:
        self.or_[key] = values

    def set_order(self, key: str) -> None:
        self.order.append(key)

    def set_join_on(self, join_type: str, on: str) -> JoinCondition:
        """Add a join and return the condition that collects its clauses."""
        join = JoinCondition(type=join_type, join_on=on)
        self.joins.append(join)
        return join


@dataclass
class JoinCondition(Condition):
    """The clauses that belong to one join."""

    type: str = ""
    join_on: str = ""

    def set_join_on(self, join_type: str, on: str) -> JoinCondition:
        raise ValueError("joins cannot be nested inside a join")


@dataclass
class SearchTag:
    """The parts of a ``search`` field tag."""

    type: str = ""
    column: str = ""
    table: str = ""
    on: list[str] = field(default_factory=list)
    join: str = ""


def make_tag(tag: str) -> SearchTag:
    """Parse a tag such as ``type:exact;column:id;table:user``."""
    result = SearchTag()
    for part in tag.split(";"):
        key, *rest = part.split(":")
        if not rest:
            continue
        if key == "type":
            result.type = rest[0]
        elif key == "column":
            result.column = rest[0]
        elif key == "table":
            result.table = rest[0]
        elif key == "on":
            result.on = rest
        elif key == "join":
            result.join = rest[0]
    return result


def search_field(tag: str, **kwargs: Any) -> Any:
    """A dataclass field carrying a ``search`` tag."""
    metadata = {**kwargs.pop("metadata", {}), FROM_QUERY_TAG: tag}
    return field(metadata=metadata, **kwargs)


def _is_zero(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (int, float, complex)) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if is_dataclass(value) and not isinstance(value, type):
        return all(_is_zero(getattr(value, f.name)) for f in dataclasses.fields(value))
    return False


def resolve_search_query(driver: str, query: Any, condition: Condition) -> None:
    """Add a clause to ``condition`` for every tagged, non-empty field of ``query``.

    Untagged dataclass fields are searched in turn; fields tagged ``-`` are skipped.
    """
    if not is_dataclass(query) or isinstance(query, type):
        raise TypeError(f"query must be a dataclass instance, not {type(query).__name__}")
    for f in dataclasses.fields(query):
        value = getattr(query, f.name)
        tag = f.metadata.get(FROM_QUERY_TAG)
        if tag is None:
            if is_dataclass(value) and not isinstance(value, type):
                resolve_search_query(driver, value, condition)
            continue
        if tag == "-" or _is_zero(value):
            continue
        _apply(driver, make_tag(tag), condition, value)


def _apply(driver: str, tag: SearchTag, condition: Condition, value: Any) -> None:
    postgres = driver == POSTGRES
    quote = "" if postgres else "`"

    def name(identifier: str) -> str:
        return f"{quote}{identifier}{quote}"

    column = f"{name(tag.table)}.{name(tag.column)}"
    kind = tag.type
    if kind == "left":
        if len(tag.on) < 2:
            raise ValueError(f"left join on {tag.table!r} needs two 'on' columns")
        join = condition.set_join_on(
            kind,
            f"left join {name(tag.join)} on {name(tag.join)}.{name(tag.on[0])} "
            f"= {name(tag.table)}.{name(tag.on[1])}",
        )
        resolve_search_query(driver, value, join)
    elif kind in _COMPARISONS:
        condition.set_where(f"{column} {_COMPARISONS[kind]} ?", [value])
    elif kind in _PATTERNS:
        operator = "ilike" if postgres and kind.startswith("i") else "like"
        condition.set_where(f"{column} {operator} ?", [_PATTERNS[kind].format(value)])
    elif kind == "in":
        condition.set_where(f"{column} in (?)", [value])
    elif kind == "isnull":
        condition.set_where(f"{column} isnull", [])
    elif kind == "order":
        if str(value).lower() in ("desc", "asc"):
            condition.set_order(f"{column} {value}")