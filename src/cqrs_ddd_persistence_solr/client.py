"""SolrClient — httpx client lifecycle, request execution, health check."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from .exceptions import SolrConnectionError, SolrQueryError
from .query import SolrRequest, SolrSelectQuery, SolrUpdateQuery
from .response import SolrResult, SolrUpdateResult
from .settings import SolrSettings

logger = logging.getLogger(__name__)


@runtime_checkable
class ISolrClient(Protocol):
    """Engine client contract consumed by the gateway."""

    def create_select(self) -> SolrSelectQuery: ...

    def create_update(self) -> SolrUpdateQuery: ...

    async def execute(self, query: SolrSelectQuery) -> SolrResult: ...

    async def update(self, update: SolrUpdateQuery) -> SolrUpdateResult: ...

    async def execute_request(self, request: SolrRequest) -> dict[str, Any]: ...


class SolrClient:
    """Wrap an ``httpx.AsyncClient`` bound to one Solr core.

    Every request is bounded by the configured timeouts; there is no retry.
    """

    def __init__(
        self,
        settings: SolrSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        **overrides: Any,
    ) -> None:
        if settings is None:
            settings = SolrSettings(**overrides)
        elif overrides:
            settings = settings.model_copy(update=overrides)
        self._settings = settings
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @property
    def settings(self) -> SolrSettings:
        return self._settings

    async def connect(self) -> httpx.AsyncClient:
        """Create and cache the HTTP client. Idempotent."""
        if self._http is not None:
            return self._http
        self._http = httpx.AsyncClient(
            base_url=self._settings.core_url,
            timeout=httpx.Timeout(
                self._settings.timeout, connect=self._settings.connect_timeout
            ),
            headers=self._settings.headers,
            transport=self._transport,
        )
        return self._http

    @property
    def http(self) -> httpx.AsyncClient:
        """Return the HTTP client; raises if not connected."""
        if self._http is None:
            raise SolrConnectionError("Not connected; call connect() first")
        return self._http

    async def close(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> SolrClient:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def health_check(self) -> bool:
        """Ping the core; return True if it answers OK."""
        if self._http is None:
            return False
        try:
            payload = await self._request("GET", "admin/ping", params={"wt": "json"})
        except (SolrConnectionError, SolrQueryError):
            return False
        return str(payload.get("status", "")).upper() == "OK"

    # -- factories ----------------------------------------------------------

    def create_select(self) -> SolrSelectQuery:
        return SolrSelectQuery()

    def create_update(self) -> SolrUpdateQuery:
        return SolrUpdateQuery()

    # -- execution ----------------------------------------------------------

    async def execute(self, query: SolrSelectQuery) -> SolrResult:
        payload = await self._request("GET", "select", params=query.to_params())
        return SolrResult.from_response(payload)

    async def update(self, update: SolrUpdateQuery) -> SolrUpdateResult:
        payload = await self._request(
            "POST",
            "update",
            params={"wt": "json"},
            content=update.to_json(),
            headers={"Content-Type": "application/json"},
        )
        return SolrUpdateResult.from_response(payload)

    async def execute_request(self, request: SolrRequest) -> dict[str, Any]:
        params = {"wt": "json", **request.params}
        return await self._request(request.method, request.handler, params=params)

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        http = self.http
        logger.debug("Solr %s %s %s", method, path, kwargs.get("params"))
        try:
            response = await http.request(method, path.lstrip("/"), **kwargs)
        except httpx.TimeoutException as e:
            raise SolrConnectionError(f"Solr request '{path}' timed out: {e}") from e
        except httpx.HTTPError as e:
            raise SolrConnectionError(f"Solr request '{path}' failed: {e}") from e

        payload = self._decode(response)
        if response.is_error:
            error = payload.get("error") if isinstance(payload, dict) else None
            message = (
                error.get("msg") if isinstance(error, dict) else None
            ) or f"Solr returned HTTP {response.status_code} for '{path}'"
            code = (
                error.get("code") if isinstance(error, dict) else None
            ) or response.status_code
            raise SolrQueryError(message, code=code)
        if not isinstance(payload, dict):
            raise SolrQueryError(f"Malformed Solr response for '{path}'")
        return payload

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
