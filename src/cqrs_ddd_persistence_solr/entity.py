"""Entity contract, base models and entity factories."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict

T_Model = TypeVar("T_Model", bound=BaseModel)

EntityFactory = Callable[[dict[str, Any]], Any]


@runtime_checkable
class IEntity(Protocol):
    """What the gateway needs from an entity: its identifier field and
    field access by name."""

    def get_identifier_field(self) -> str: ...

    def get_field(self, name: str) -> Any: ...

    def set_field(self, name: str, value: Any) -> None: ...


class SolrEntity(BaseModel):
    """Base class for domain entities stored in a Solr core.

    Usage::

        class Book(SolrEntity):
            id: str | None = None
            title: str
            published_at: datetime | None = None
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    identifier_field: ClassVar[str] = "id"

    def get_identifier_field(self) -> str:
        return self.identifier_field

    def get_identifier(self) -> Any:
        return self.get_field(self.identifier_field)

    def get_field(self, name: str) -> Any:
        return getattr(self, name, None)

    def set_field(self, name: str, value: Any) -> None:
        setattr(self, name, value)


class ProjectionEntity(SolrEntity):
    """Loosely-typed row: accepts any field hydrated onto it.

    Fields live in the model's extras, so Solr names that pydantic would
    treat as private (``_root_``) or that shadow class attributes
    (``identifier_field``) are kept as plain data.
    """

    model_config = ConfigDict(extra="allow")

    @property
    def fields(self) -> dict[str, Any]:
        if self.__pydantic_extra__ is None:
            self.__pydantic_extra__ = {}
        return self.__pydantic_extra__

    def get_field(self, name: str) -> Any:
        return self.fields.get(name)

    def set_field(self, name: str, value: Any) -> None:
        self.fields[name] = value

    def to_dict(self) -> dict[str, Any]:
        return dict(self.fields)


def model_factory(model_cls: type[T_Model]) -> Callable[[dict[str, Any]], T_Model]:
    """Build an entity factory validating raw document fields into *model_cls*."""

    def _factory(fields: dict[str, Any]) -> T_Model:
        return model_cls.model_validate(fields)

    _factory.__name__ = f"{model_cls.__name__}_factory"
    return _factory
