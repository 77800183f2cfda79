"""HTTP backends for the ImportBackend and SavedObjectStore protocols.

Talks to a Kibana-style server through ``httpx``.  Transport failures are
normalized to the builtin ``TimeoutError`` / ``ConnectionError`` (HTTP error
statuses raise the ``ConnectionError`` subclass ``BackendHTTPError``) so callers
never depend on httpx exception types.  These backends do not retry;
retrying is the importer's job.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from indexkit.config import IndexKitConfig
from indexkit.errors import BackendHTTPError
from indexkit.models import SavedObject

logger = logging.getLogger("indexkit")


class _KibanaHTTP:
    """Shared request plumbing for the Kibana backends."""

    def __init__(self, config: IndexKitConfig | None = None) -> None:
        self._config = config or IndexKitConfig()

    def _headers(self) -> dict[str, str]:
        headers = {self._config.xsrf_header: "true"}
        headers.update(self._config.headers)
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Send one request to ``{api_url}{path}`` and return decoded JSON."""
        url = f"{self._config.api_url}{path}"
        effective_timeout = timeout or self._config.backend_timeout_seconds
        try:
            response = httpx.request(
                method,
                url,
                json=json,
                params=params,
                headers=self._headers(),
                timeout=effective_timeout,
            )
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as exc:
            raise TimeoutError(f"{method} {url} timed out: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            raise BackendHTTPError(
                f"{method} {url} failed with HTTP {exc.response.status_code}: "
                f"{exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ConnectionError(f"{method} {url} failed: {exc}") from exc


class KibanaImportBackend(_KibanaHTTP):
    """File-upload import and index listing over HTTP.

    Satisfies :class:`~indexkit.protocols.ImportBackend` via structural
    subtyping.
    """

    def import_data(
        self,
        body: dict[str, Any],
        index_id: str | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        params = {"id": index_id} if index_id is not None else None
        return self._request(
            "POST", "/fileupload/import", json=body, params=params, timeout=timeout
        )

    def list_indices(self, timeout: float | None = None) -> list[dict[str, Any]]:
        return self._request("GET", "/index_management/indices", timeout=timeout)


class KibanaSavedObjectStore(_KibanaHTTP):
    """Saved-object store backed by the ``/saved_objects`` API.

    Satisfies :class:`~indexkit.protocols.SavedObjectStore` via structural
    subtyping.
    """

    def find(
        self,
        type: str,
        fields: list[str] | None = None,
        per_page: int = 20,
    ) -> list[SavedObject]:
        params: dict[str, Any] = {"type": type, "per_page": per_page}
        if fields:
            params["fields"] = fields
        payload = self._request("GET", "/saved_objects/_find", params=params)
        return [SavedObject(**obj) for obj in payload.get("saved_objects", [])]

    def create(
        self,
        type: str,
        attributes: dict[str, Any],
        overwrite: bool = False,
        id: str | None = None,
    ) -> SavedObject:
        path = f"/saved_objects/{type}/{id}" if id else f"/saved_objects/{type}"
        params = {"overwrite": "true"} if overwrite else None
        payload = self._request(
            "POST", path, json={"attributes": attributes}, params=params
        )
        logger.info("indexkit | saved_object=%s | id=%s | created", type, payload.get("id"))
        return SavedObject(**payload)

    def get(self, type: str, id: str) -> SavedObject:
        return SavedObject(**self._request("GET", f"/saved_objects/{type}/{id}"))
