"""
Filter-predicate builder.

Optional filters are declared in a fixed order; the ones whose value is present
are reduced into a single ``WHERE`` expression with numbered placeholders
(``:p1``, ``:p2`` ...) and a parallel list of bound values. Column names come
from code, never from request input; request values only ever travel as bound
parameters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple, Union

Columns = Union[str, Sequence[str]]

EQUALS = "="
CONTAINS = "ILIKE"
AT_LEAST = ">="
AT_MOST = "<="

LIKE_ESCAPE = "\\"


def placeholder(index: int) -> str:
    return f":p{index}"


def escape_like(value: str) -> str:
    """Escape LIKE metacharacters so ``value`` matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


@dataclass(frozen=True)
class Clause:
    """One condition: any of ``columns`` compared to a single bound value."""

    columns: Tuple[str, ...]
    operator: str
    value: Any

    def render(self, index: int) -> str:
        ref = placeholder(index)
        parts = [f"{column} {self.operator} {ref}" for column in self.columns]
        if len(parts) == 1:
            return parts[0]
        return "(" + " OR ".join(parts) + ")"


@dataclass(frozen=True)
class Predicate:
    """A rendered ``WHERE`` clause (or empty string) plus its ordered parameters."""

    where: str = ""
    params: Tuple[Any, ...] = ()

    @property
    def next_index(self) -> int:
        """Index of the first placeholder following the predicate's own."""
        return len(self.params) + 1

    def bind(self, *extra: Any) -> Dict[str, Any]:
        """Map ``p1..pN`` to the predicate's values followed by ``extra``."""
        values = list(self.params) + list(extra)
        return {f"p{i}": value for i, value in enumerate(values, start=1)}


@dataclass
class PredicateBuilder:
    clauses: List[Clause] = field(default_factory=list)

    def _add(self, columns: Columns, operator: str, value: Any) -> "PredicateBuilder":
        if not is_present(value):
            return self
        if isinstance(columns, str):
            columns = (columns,)
        self.clauses.append(Clause(tuple(columns), operator, value))
        return self

    def equals(self, columns: Columns, value: Any) -> "PredicateBuilder":
        return self._add(columns, EQUALS, value)

    def contains(self, columns: Columns, value: Any) -> "PredicateBuilder":
        """Case-insensitive substring match."""
        if not is_present(value):
            return self
        return self._add(columns, CONTAINS, f"%{escape_like(str(value))}%")

    def at_least(self, columns: Columns, value: Any) -> "PredicateBuilder":
        return self._add(columns, AT_LEAST, value)

    def at_most(self, columns: Columns, value: Any) -> "PredicateBuilder":
        return self._add(columns, AT_MOST, value)

    def build(self) -> Predicate:
        if not self.clauses:
            return Predicate()
        conditions = [
            clause.render(index) for index, clause in enumerate(self.clauses, start=1)
        ]
        return Predicate(
            where="WHERE " + " AND ".join(conditions),
            params=tuple(clause.value for clause in self.clauses),
        )
