"""HTTP connection to a Chef server REST API.

Connection wraps a single ``httpx.Client`` and exposes the four verbs the
resource layer needs. Every verb returns the JSON-decoded response body.
Error statuses are mapped onto the chefapi exception hierarchy; transport
failures raised by httpx are left untouched.
"""

import json
import logging
from typing import Any

import httpx

from .config.models import ConnectionConfig
from .errors import HTTPConflict, HTTPError, HTTPNotFound

logger = logging.getLogger(__name__)

_STATUS_ERRORS: dict[int, type[HTTPError]] = {
    404: HTTPNotFound,
    409: HTTPConflict,
}


class Connection:
    """Synchronous Chef server connection.

    The underlying httpx client is safe to share between threads, so a single
    Connection can serve the worker pool used by bulk operations.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._base_url = config.server_url
        if config.organization:
            self._base_url = f"{self._base_url}/organizations/{config.organization}"

        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-Chef-Version": config.api_version,
        }
        if config.client_name:
            headers["X-Ops-UserId"] = config.client_name

        self._client = httpx.Client(
            base_url=self._base_url,
            headers=headers,
            timeout=config.timeout,
            verify=config.ssl_verify,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: ConnectionConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> "Connection":
        return cls(config, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def thread_count(self) -> int:
        """Worker pool size for bulk operations."""
        return self._config.thread_count

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def get(self, path: str) -> Any:
        return self._request("GET", path)

    def post(self, path: str, body: str) -> Any:
        """POST an already serialized JSON document to ``path``."""
        return self._request("POST", path, content=body)

    def put(self, path: str, body: str) -> Any:
        """PUT an already serialized JSON document to ``path``."""
        return self._request("PUT", path, content=body)

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, content: str | None = None) -> Any:
        path = path.lstrip("/")
        logger.debug(f"{method} {self._base_url}/{path}")
        resp = self._client.request(method, path, content=content)

        if resp.status_code >= 400:
            raise self._error_for(resp, path)
        return self._decode(resp)

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        if not resp.content:
            return {}
        return resp.json()

    @staticmethod
    def _error_for(resp: httpx.Response, path: str) -> HTTPError:
        try:
            body = resp.json() if resp.content else None
        except json.JSONDecodeError:
            body = None

        detail = resp.text
        if isinstance(body, dict) and "error" in body:
            error = body["error"]
            detail = (
                "; ".join(str(e) for e in error)
                if isinstance(error, list)
                else str(error)
            )

        if len(detail) > 200:
            detail = detail[:197] + "..."
        error_class = _STATUS_ERRORS.get(resp.status_code, HTTPError)
        message = f"{resp.status_code} for {path}"
        if detail:
            message = f"{message}: {detail}"
        return error_class(message, status_code=resp.status_code, path=path, body=body)
