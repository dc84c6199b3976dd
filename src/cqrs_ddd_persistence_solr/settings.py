"""SolrSettings — connection configuration for ``SolrClient``."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SolrSettings(BaseSettings):
    """
    Where the Solr core lives and how long to wait for it.

    Values can be set via environment variables prefixed with ``SOLR_``,
    e.g. ``SOLR_CORE=books``. ``timeout`` bounds every request
    (read/write/pool); ``connect_timeout`` bounds establishing the connection.
    """

    model_config = SettingsConfigDict(env_prefix="SOLR_", frozen=True)

    url: str = "http://localhost:8983/solr"
    core: str
    timeout: float = Field(default=10.0, gt=0)
    connect_timeout: float = Field(default=5.0, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def core_url(self) -> str:
        return f"{self.url.rstrip('/')}/{self.core.strip('/')}/"
