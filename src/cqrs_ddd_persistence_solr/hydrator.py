"""Hydrators: field maps <-> entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

T_Target = TypeVar("T_Target")


@runtime_checkable
class IHydrator(Protocol):
    """Moves field data between raw mappings and entity instances."""

    def hydrate(self, data: Mapping[str, Any], target: T_Target) -> T_Target: ...

    def extract(self, entity: Any) -> dict[str, Any]: ...


@runtime_checkable
class IDenormalizedExtractor(Protocol):
    """Hydrators that can also produce a flat, denormalized field map."""

    def extract_denormalized(self, entity: Any) -> dict[str, Any]: ...


class PydanticHydrator:
    """
    Hydrator for Pydantic models (and dataclasses / plain objects).

    Uses ``model_dump(mode='python')`` for extraction so temporal values stay
    native until serialization. ``field_map`` renames entity fields to Solr
    field names on the way out and back on the way in.
    """

    def __init__(
        self,
        *,
        field_map: dict[str, str] | None = None,
        exclude_fields: set[str] | None = None,
    ) -> None:
        self._field_map = field_map or {}
        self._exclude_fields = exclude_fields or set()

    def hydrate(self, data: Mapping[str, Any], target: T_Target) -> T_Target:
        for name, value in self._apply_field_map(dict(data), reverse=True).items():
            setter = getattr(target, "set_field", None)
            if callable(setter):
                setter(name, value)
            else:
                setattr(target, name, value)
        return target

    def extract(self, entity: Any) -> dict[str, Any]:
        if isinstance(entity, BaseModel):
            data = entity.model_dump(mode="python")
        elif is_dataclass(entity) and not isinstance(entity, type):
            data = asdict(entity)
        else:
            data = dict(vars(entity))
        data = {k: v for k, v in data.items() if k not in self._exclude_fields}
        return self._apply_field_map(data, reverse=False)

    def _apply_field_map(
        self,
        data: dict[str, Any],
        *,
        reverse: bool = False,
    ) -> dict[str, Any]:
        if not self._field_map:
            return data
        if reverse:
            rev = {v: k for k, v in self._field_map.items()}
            return {rev.get(k, k): v for k, v in data.items()}
        return {self._field_map.get(k, k): v for k, v in data.items()}


class DenormalizedPydanticHydrator(PydanticHydrator):
    """
    Pydantic hydrator that flattens nested objects for flat Solr schemas.

    ``{"author": {"name": "Ann"}}`` becomes ``{"author.name": "Ann"}``; a list
    of nested objects becomes one multi-valued field per nested key.
    """

    def __init__(
        self,
        *,
        separator: str = ".",
        field_map: dict[str, str] | None = None,
        exclude_fields: set[str] | None = None,
    ) -> None:
        super().__init__(field_map=field_map, exclude_fields=exclude_fields)
        self._separator = separator

    def extract_denormalized(self, entity: Any) -> dict[str, Any]:
        flat: dict[str, Any] = {}
        for key, value in self.extract(entity).items():
            self._flatten(key, value, flat)
        return flat

    def _flatten(self, prefix: str, value: Any, out: dict[str, Any]) -> None:
        if isinstance(value, Mapping):
            for key, nested in value.items():
                self._flatten(f"{prefix}{self._separator}{key}", nested, out)
        elif isinstance(value, list) and value and all(
            isinstance(v, Mapping) for v in value
        ):
            for item in value:
                row: dict[str, Any] = {}
                self._flatten(prefix, item, row)
                for key, nested in row.items():
                    out.setdefault(key, []).append(nested)
        else:
            out[prefix] = value
