"""
Result containers returned by the gateway.

A single ``ResultContainer`` type tagged with a ``ResultKind`` covers the
four shapes a fetch can produce: entities or projection rows, each either
plain or carrying page metadata. Containers are only built through
:func:`build_container`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .pagination import PaginationState

T = TypeVar("T")


class FetchMode(str, Enum):
    """What the raw documents are mapped into."""

    ENTITIES = "entities"
    PROJECTION = "projection"


class ResultKind(str, Enum):
    ENTITIES = "entities"
    PAGINATED_ENTITIES = "paginated_entities"
    PROJECTION = "projection"
    PAGINATED_PROJECTION = "paginated_projection"


_KINDS: dict[tuple[FetchMode, bool], ResultKind] = {
    (FetchMode.ENTITIES, False): ResultKind.ENTITIES,
    (FetchMode.ENTITIES, True): ResultKind.PAGINATED_ENTITIES,
    (FetchMode.PROJECTION, False): ResultKind.PROJECTION,
    (FetchMode.PROJECTION, True): ResultKind.PAGINATED_PROJECTION,
}


@dataclass(frozen=True)
class ResultContainer(Generic[T]):
    """Rows in engine order, plus page metadata for paginated kinds."""

    kind: ResultKind
    rows: tuple[T, ...] = ()
    current_page: int | None = None
    per_page: int | None = None
    total: int | None = None

    @property
    def is_paginated(self) -> bool:
        return self.kind in (
            ResultKind.PAGINATED_ENTITIES,
            ResultKind.PAGINATED_PROJECTION,
        )

    @property
    def is_projection(self) -> bool:
        return self.kind in (ResultKind.PROJECTION, ResultKind.PAGINATED_PROJECTION)

    @property
    def page_count(self) -> int | None:
        """Number of pages, for paginated containers."""
        if not self.is_paginated or not self.per_page or self.total is None:
            return None
        return math.ceil(self.total / self.per_page)

    def first(self) -> T | None:
        return self.rows[0] if self.rows else None

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[T]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> T:
        return self.rows[index]

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"kind": self.kind.value, "count": len(self.rows)}
        if self.is_paginated:
            result.update(
                current_page=self.current_page, per_page=self.per_page, total=self.total
            )
        return result


def build_container(
    mode: FetchMode,
    rows: Iterable[T],
    pagination: PaginationState | None = None,
    total: int | None = None,
) -> ResultContainer[T]:
    """Build the container shape for *mode*.

    The container is paginated iff *pagination* says so; page metadata is
    then taken from it, with *total* as the engine's match count.
    """
    paginated = pagination is not None and pagination.paginated
    kind = _KINDS[(FetchMode(mode), paginated)]
    if not paginated:
        return ResultContainer(kind=kind, rows=tuple(rows))
    return ResultContainer(
        kind=kind,
        rows=tuple(rows),
        current_page=pagination.current_page,  # type: ignore[union-attr]
        per_page=pagination.page_size,  # type: ignore[union-attr]
        total=total,
    )
