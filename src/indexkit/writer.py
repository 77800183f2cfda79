"""IndexWriter -- a single create-or-append import request.

Wraps one call to :meth:`ImportBackend.import_data` and converts both the
server's response and any transport failure into an
:class:`~indexkit.models.ImportResult`.  Nothing raised by the backend
escapes :meth:`IndexWriter.write`.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from indexkit.config import IndexKitConfig
from indexkit.models import ImportFailure, ImportResult, IndexingDetails
from indexkit.protocols import ImportBackend

logger = logging.getLogger("indexkit")


def build_import_body(details: IndexingDetails, config: IndexKitConfig) -> dict[str, Any]:
    """Build the JSON body of an import request."""
    body: dict[str, Any] = {
        "index": details.index,
        "data": details.data,
        "settings": details.settings,
        "mappings": details.mappings,
        "ingestPipeline": details.ingest_pipeline,
    }
    if config.file_type is not None:
        body["fileType"] = config.file_type
    if config.app is not None:
        body["app"] = config.app
    return body


def _error_text(error: Any) -> str | None:
    if error is None:
        return None
    if isinstance(error, dict):
        # Search-engine errors nest the readable text under "reason".
        reason = error.get("reason") or error.get("message")
        if reason is None and isinstance(error.get("error"), dict):
            reason = error["error"].get("reason")
        return str(reason) if reason is not None else str(error)
    return str(error)


def _parse_failure(raw: Any) -> ImportFailure:
    if not isinstance(raw, dict):
        return ImportFailure(reason=str(raw))
    doc = raw.get("doc")
    return ImportFailure(
        item=raw.get("item"),
        reason=_error_text(raw.get("reason")) or "",
        doc=doc if isinstance(doc, dict) else None,
    )


def parse_import_response(payload: Any) -> ImportResult:
    """Convert a raw import response into an :class:`ImportResult`.

    Responses that do not fit the expected shape become a failed result.
    """
    if not isinstance(payload, dict):
        return ImportResult(
            success=False,
            error=f"Unexpected import response: {type(payload).__name__}",
        )
    success = payload.get("success") is True
    index_id = payload.get("id")
    try:
        failures = [_parse_failure(f) for f in payload.get("failures") or []]
        return ImportResult(
            success=success,
            failures=failures,
            doc_count=int(payload.get("docCount") or 0) if success else 0,
            error=None if success else (_error_text(payload.get("error")) or "Import failed"),
            id=str(index_id) if index_id is not None else None,
        )
    except (ValueError, TypeError, ValidationError) as exc:
        return ImportResult(
            success=False,
            error=f"Malformed import response: {exc}",
        )


class IndexWriter:
    """Issues one import request per call.

    Parameters
    ----------
    backend:
        The import endpoint.
    config:
        Pipeline configuration.  Uses defaults when *None*.
    """

    def __init__(
        self,
        backend: ImportBackend,
        config: IndexKitConfig | None = None,
    ) -> None:
        self._backend = backend
        self._config = config or IndexKitConfig()

    def write(self, details: IndexingDetails) -> ImportResult:
        """Write *details.data* to *details.index*.

        Appends when ``details.id`` is set, otherwise asks the server to
        create the index.  Never raises.
        """
        body = build_import_body(details, self._config)
        try:
            payload = self._backend.import_data(
                body,
                index_id=details.id,
                timeout=self._config.backend_timeout_seconds,
            )
        except Exception as exc:
            logger.warning(
                "indexkit | index=%s | mode=%s | error=%s",
                details.index,
                "append" if details.id is not None else "create",
                exc,
            )
            return ImportResult(success=False, error=str(exc))
        return parse_import_response(payload)
