"""Solr gateway exception hierarchy.

All exceptions inherit from ``SolrGatewayError`` and provide ``to_dict()``
for API-friendly error responses.
"""

from __future__ import annotations

from typing import Any


class SolrGatewayError(Exception):
    """Root exception for the Solr persistence package."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class SolrConnectionError(SolrGatewayError):
    """Raised when the client is not connected or the transport fails."""


class SolrQueryError(SolrGatewayError):
    """Raised when Solr rejects a request or answers with a malformed body."""

    def __init__(self, message: str, code: int | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "SOLR_QUERY_ERROR",
            "message": self.message,
            "code": self.code,
        }


class UnsupportedModeError(SolrGatewayError):
    """Raised when ``query()`` is called with an unknown fetch mode."""

    def __init__(self, mode: object) -> None:
        self.mode = mode
        super().__init__(f'Unknown query mode "{mode}"')

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_MODE",
            "mode": str(self.mode),
            "message": str(self),
        }


class MissingIdentifierError(SolrGatewayError):
    """Raised when ``create()`` is called without an identifier."""


class NotFoundError(SolrGatewayError):
    """Raised when a document is not found."""


class EntityNotFoundError(NotFoundError):
    """Raised when a specific entity cannot be found by ID."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id={entity_id!r} not found")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "ENTITY_NOT_FOUND",
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id),
        }


class WriteError(SolrGatewayError):
    """
    A write (create, persist, delete, purge) failed.

    Carries the original message and code; the original exception is
    chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        code: int | str | None = 0,
        cause: BaseException | None = None,
    ) -> None:
        self.message = message
        self.code = code
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def wrap(cls, exc: BaseException) -> WriteError:
        """Wrap *exc*, keeping its message and code."""
        if isinstance(exc, WriteError):
            return exc
        message = str(exc) or exc.__class__.__name__
        return cls(message, code=getattr(exc, "code", 0), cause=exc)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "WRITE_ERROR",
            "message": self.message,
            "code": self.code,
            "cause": type(self.__cause__).__name__ if self.__cause__ else None,
        }


class OperationNotSupportedError(SolrGatewayError, NotImplementedError):
    """Raised by gateway operations that are not handled yet."""
