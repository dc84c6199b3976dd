"""FilterOperator and SortDirection — operators a descriptor can carry."""

from __future__ import annotations

from enum import Enum


class FilterOperator(str, Enum):
    """Operators a result-set descriptor filter may carry."""

    EQ = "="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="

    @classmethod
    def parse(cls, value: object) -> FilterOperator:
        """Coerce *value* to an operator; unknown operators degrade to ``EQ``."""
        if isinstance(value, cls):
            return value
        raw = getattr(value, "value", value)
        try:
            return cls(str(raw).strip())
        except ValueError:
            return cls.EQ

    @property
    def is_comparison(self) -> bool:
        return self is not FilterOperator.EQ


class SortDirection(str, Enum):
    """Sort direction as rendered in a Solr ``sort`` parameter."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: object) -> SortDirection:
        if isinstance(value, cls):
            return value
        raw = str(getattr(value, "value", value)).strip().lower()
        if raw in {"desc", "-1", "-"}:
            return cls.DESC
        return cls.ASC
