"""Typed predicate builder for optional search filters.

Each filter is a ``(column, operator, value)`` triple; empty values are
skipped and every value is bound as a parameter.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy import String, cast, or_
from sqlalchemy.sql import ColumnElement, Select

LIKE_ESCAPE = "\\"


class Operator(str, Enum):
    EQ = "eq"
    GTE = "gte"
    LTE = "lte"
    IN = "in"
    CONTAINS = "contains"  # case-insensitive substring


@dataclass(frozen=True)
class Predicate:
    columns: tuple[ColumnElement, ...]
    operator: Operator
    value: Any

    def clause(self) -> ColumnElement:
        clauses = [self._single(column) for column in self.columns]
        return clauses[0] if len(clauses) == 1 else or_(*clauses)

    def _single(self, column: ColumnElement) -> ColumnElement:
        if self.operator is Operator.EQ:
            return column == self.value
        if self.operator is Operator.GTE:
            return column >= self.value
        if self.operator is Operator.LTE:
            return column <= self.value
        if self.operator is Operator.IN:
            return column.in_(self.value)
        return cast(column, String).ilike(f"%{escape_like(self.value)}%", escape=LIKE_ESCAPE)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (list, tuple, set)) and not value)


class FilterBuilder:
    """Accumulates predicates and applies them to a SELECT."""

    def __init__(self) -> None:
        self._predicates: list[Predicate] = []

    def add(self, column: ColumnElement, operator: Operator, value: Any) -> "FilterBuilder":
        if not _is_empty(value):
            self._predicates.append(Predicate((column,), operator, value))
        return self

    def any_contains(self, columns: list[ColumnElement], value: str | None) -> "FilterBuilder":
        """Match ``value`` as a substring of at least one of ``columns``."""
        if not _is_empty(value):
            self._predicates.append(Predicate(tuple(columns), Operator.CONTAINS, value))
        return self

    @property
    def predicates(self) -> list[Predicate]:
        return list(self._predicates)

    def apply(self, stmt: Select) -> Select:
        if not self._predicates:
            return stmt
        return stmt.where(*(p.clause() for p in self._predicates))
