"""HTTP key/value configuration store."""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from ..errors import StoreOperationError
from ..interfaces import ConfigStore

logger = logging.getLogger(__name__)


class HttpConfigStore(ConfigStore):
    """Reads and writes options against a REST key/value endpoint.

    ``GET {base_url}/{key}`` returns the option text, 404 meaning not
    found. Writes use ``PUT`` with a text body and ``DELETE`` to clear a
    key. Keys are percent-encoded into a single path segment. Any other
    error status propagates as ``httpx.HTTPStatusError``.

    When no client is passed, one is created with the given timeout and
    bearer token, and closed by ``close()``.
    """

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.Client] = None,
        timeout_seconds: float = 10.0,
        api_key: Optional[str] = None,
        read_only: bool = False,
    ):
        self.base_url = base_url.rstrip("/")
        self.read_only = read_only
        self._owns_client = client is None
        if client is None:
            headers = {"Accept": "text/plain"}
            if api_key:
                headers["Authorization"] = f"Bearer {api_key}"
            client = httpx.Client(timeout=httpx.Timeout(timeout_seconds), headers=headers)
        self._client: Optional[httpx.Client] = client

    @property
    def name(self) -> str:
        return f"HTTP ({self.base_url})"

    @property
    def can_read(self) -> bool:
        return True

    @property
    def can_write(self) -> bool:
        return not self.read_only

    def read(self, key: str) -> Optional[str]:
        response = self._require_client().get(self._url(key))
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.text

    def write(self, key: str, value: Optional[str]) -> None:
        if self.read_only:
            raise StoreOperationError(f"{self.name} store is read-only (key: {key})")

        client = self._require_client()
        if value is None:
            response = client.delete(self._url(key))
            if response.status_code == 404:
                return
        else:
            response = client.put(
                self._url(key),
                content=value.encode("utf-8"),
                headers={"Content-Type": "text/plain; charset=utf-8"},
            )
        response.raise_for_status()

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            logger.debug(f"Closed HTTP client for {self.base_url}")
        self._client = None

    def _require_client(self) -> httpx.Client:
        if self._client is None:
            raise StoreOperationError(f"{self.name} store is closed")
        return self._client

    def _url(self, key: str) -> str:
        return f"{self.base_url}/{quote(key, safe='')}"
