"""
Range merging for comparison filters.

``>``, ``>=``, ``<`` and ``<=`` filters on the same property collapse into a
single Solr range clause::

    (price, >=, 10) + (price, <, 20)  ->  price:["10" TO "20"}
    (price, >, 10)                    ->  price:{"10" TO *]

Equality filters (and anything with an operator the merger does not know)
become ``property:value`` clauses on their own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple

from .escaping import escape_phrase
from .operators import FilterOperator
from .serialization import to_query_literal

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .descriptor import Filter

logger = logging.getLogger(__name__)

WILDCARD = "*"

_LOWER = "lower"
_UPPER = "upper"

# operator -> (slot, inclusive)
_BOUND_SLOTS: dict[FilterOperator, tuple[str, bool]] = {
    FilterOperator.GE: (_LOWER, True),
    FilterOperator.GT: (_LOWER, False),
    FilterOperator.LE: (_UPPER, True),
    FilterOperator.LT: (_UPPER, False),
}


class FilterClause(NamedTuple):
    """One Solr filter query: a unique key and the query text."""

    key: str
    query: str


@dataclass(frozen=True)
class RangeBound:
    value: str
    inclusive: bool


@dataclass
class PropertyRange:
    """Lower and upper bound collected for one property."""

    lower: RangeBound | None = None
    upper: RangeBound | None = None

    def render(self) -> str:
        lower = self.lower.value if self.lower else WILDCARD
        upper = self.upper.value if self.upper else WILDCARD
        opening = "{" if self.lower and not self.lower.inclusive else "["
        closing = "}" if self.upper and not self.upper.inclusive else "]"
        return f"{opening}{lower} TO {upper}{closing}"


class RangeAccumulator:
    """Per-compile mapping of property -> partial range.

    Properties keep the order in which they were first seen. When two
    filters target the same bound of one property, the last one wins.
    """

    def __init__(self) -> None:
        self._ranges: dict[str, PropertyRange] = {}

    def record(self, prop: str, operator: FilterOperator, escaped_value: str) -> None:
        slot, inclusive = _BOUND_SLOTS[operator]
        current = self._ranges.setdefault(prop, PropertyRange())
        if getattr(current, slot) is not None:
            logger.debug(
                "Range %s bound of '%s' overwritten by %s %s",
                slot,
                prop,
                operator.value,
                escaped_value,
            )
        setattr(current, slot, RangeBound(escaped_value, inclusive))

    def clauses(self) -> Iterator[FilterClause]:
        for prop, bounds in self._ranges.items():
            yield FilterClause(prop, f"{prop}:{bounds.render()}")


def equality_clause(prop: str, value: Any) -> FilterClause:
    return FilterClause(prop, f"{prop}:{to_query_literal(value)}")


def merge_filters(filters: Iterable[Filter]) -> list[FilterClause]:
    """Compile descriptor filters into Solr filter clauses.

    Equality clauses come first, in descriptor order, followed by one range
    clause per compared property in first-seen order. Keys are unique: a
    property producing more than one clause gets ``#2``, ``#3``... suffixes
    on the later ones.
    """
    clauses: list[FilterClause] = []
    ranges = RangeAccumulator()
    for item in filters:
        operator = FilterOperator.parse(item.operator)
        if operator.is_comparison:
            ranges.record(
                item.property, operator, escape_phrase(to_query_literal(item.value))
            )
        else:
            clauses.append(equality_clause(item.property, item.value))
    clauses.extend(ranges.clauses())
    return _unique_keys(clauses)


def _unique_keys(clauses: list[FilterClause]) -> list[FilterClause]:
    seen: dict[str, int] = {}
    result: list[FilterClause] = []
    for clause in clauses:
        count = seen.get(clause.key, 0) + 1
        seen[clause.key] = count
        key = clause.key if count == 1 else f"{clause.key}#{count}"
        result.append(FilterClause(key, clause.query))
    return result
