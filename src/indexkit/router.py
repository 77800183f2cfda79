"""UploadRouter -- orchestrator and public API for an indexkit upload.

Routes parsed file content through the full upload pipeline:

1. Fail-fast precondition checks (file and transform present).
2. Resolve the transform into :class:`IndexingDetails`.
3. Look the target index up among existing indices.
4. Create the index when it does not exist yet.
5. Import every record via :class:`ChunkedImporter`.
6. Register an index pattern via :class:`IndexPatternManager`.
7. Assemble and return :class:`UploadResult`.

Apart from the two preconditions, every failure is returned on the result
with an error code; later stages are skipped once a stage fails.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from indexkit.config import IndexKitConfig
from indexkit.errors import BackendHTTPError, ErrorCode, IndexKitException, IngestError
from indexkit.importer import ChunkedImporter
from indexkit.index_patterns import IndexPatternManager
from indexkit.models import (
    IndexCheck,
    IndexPatternStatus,
    UploadResult,
)
from indexkit.protocols import ImportBackend, SavedObjectStore, TransformStrategy
from indexkit.transforms import resolve_transform
from indexkit.writer import IndexWriter

logger = logging.getLogger("indexkit")


class UploadRouter:
    """Top-level orchestrator for file-upload indexing.

    Builds the writer, importer and index-pattern manager from the
    injected backends and config, then exposes :meth:`trigger_indexing`
    and :meth:`atrigger_indexing` as the public API.

    Parameters
    ----------
    backend:
        Import and index listing endpoints.
    store:
        Saved-object store holding index patterns.
    config:
        Pipeline configuration.  Uses defaults when *None*.
    """

    def __init__(
        self,
        backend: ImportBackend,
        store: SavedObjectStore,
        config: IndexKitConfig | None = None,
    ) -> None:
        self._config = config or IndexKitConfig()
        self._backend = backend
        self._writer = IndexWriter(backend, self._config)
        self._importer = ChunkedImporter(self._writer, self._config)
        self._patterns = IndexPatternManager(store, self._config)

    # ------------------------------------------------------------------
    # Index lookups
    # ------------------------------------------------------------------

    def get_existing_indices(self) -> list[dict[str, Any]]:
        """Return every index reported by the server."""
        return self._backend.list_indices(
            timeout=self._config.backend_timeout_seconds
        )

    def get_existing_index_patterns(self) -> list[str]:
        """Return the titles of the stored index patterns."""
        return self._patterns.list_pattern_titles()

    def check_index(self, name: str) -> IndexCheck:
        """Report whether index *name* exists and, if so, its uuid."""
        for index in self.get_existing_indices():
            if index.get("name") == name:
                return IndexCheck(exists=True, id=index.get("uuid"))
        return IndexCheck(exists=False)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def trigger_indexing(
        self,
        parsed_file: Any,
        transform: str | TransformStrategy | None,
        index_name: str,
        data_type: str | None = None,
    ) -> UploadResult:
        """Transform, import and register *parsed_file* as *index_name*.

        Parameters
        ----------
        parsed_file:
            Parsed file content handed to the transform.
        transform:
            Built-in transform key or custom ``TransformStrategy``.
        index_name:
            Target index; created when missing.
        data_type:
            Transform-specific data type (e.g. ``geo_point``).

        Returns
        -------
        UploadResult
            The fully-assembled result.

        Raises
        ------
        IndexKitException
            ``E_NO_FILE`` when *parsed_file* is None, ``E_TRANSFORM_MISSING``
            when *transform* is empty.  Raised before any network call.
        """
        overall_start = time.monotonic()

        if parsed_file is None:
            raise IndexKitException(
                code=ErrorCode.E_NO_FILE, message="No file imported", stage="precheck"
            )
        if not transform:
            raise IndexKitException(
                code=ErrorCode.E_TRANSFORM_MISSING,
                message="No processor defined",
                stage="precheck",
            )

        result = UploadResult(index=index_name)

        # ==============================================================
        # Step 1: Resolve Transform
        # ==============================================================
        resolution = resolve_transform(transform, parsed_file, data_type)
        if not resolution.success or resolution.details is None:
            code = resolution.code or ErrorCode.E_TRANSFORM_NO_DETAILS
            return self._fail(
                result,
                overall_start,
                IngestError(
                    code=code,
                    message=resolution.error or "Transform failed",
                    stage="transform",
                    index=index_name,
                ),
            )
        details = resolution.details.model_copy(update={"index": index_name})

        if not index_name:
            return self._fail(
                result,
                overall_start,
                IngestError(
                    code=ErrorCode.E_IMPORT_NO_INDEX,
                    message="No index supplied",
                    stage="import",
                ),
            )

        # ==============================================================
        # Step 2: Check Index
        # ==============================================================
        try:
            existing = self.check_index(index_name)
        except TimeoutError as exc:
            return self._fail(
                result,
                overall_start,
                IngestError(
                    code=ErrorCode.E_BACKEND_TIMEOUT,
                    message=f"Index listing error: {exc}",
                    stage="check_index",
                    recoverable=True,
                    index=index_name,
                ),
            )
        except BackendHTTPError as exc:
            return self._fail(
                result,
                overall_start,
                IngestError(
                    code=ErrorCode.E_BACKEND_HTTP,
                    message=f"Index listing error: {exc}",
                    stage="check_index",
                    index=index_name,
                ),
            )
        except Exception as exc:
            return self._fail(
                result,
                overall_start,
                IngestError(
                    code=ErrorCode.E_BACKEND_CONNECT,
                    message=f"Index listing error: {exc}",
                    stage="check_index",
                    recoverable=True,
                    index=index_name,
                ),
            )

        # ==============================================================
        # Step 3: Create Index
        # ==============================================================
        if existing.exists:
            index_id = existing.id
        else:
            created = self._writer.write(
                details.model_copy(update={"id": None, "data": []})
            )
            if not created.success:
                result.import_result = created
                return self._fail(
                    result,
                    overall_start,
                    IngestError(
                        code=ErrorCode.E_INDEX_CREATE_FAILED,
                        message=created.error or "Index creation failed",
                        stage="create_index",
                        recoverable=True,
                        index=index_name,
                    ),
                )
            index_id = created.id
            result.created_index = True
        result.index_id = index_id

        # ==============================================================
        # Step 4: Import Records
        # ==============================================================
        import_result = self._importer.import_all(
            index_id, index_name, details.data, mappings={}, settings={}
        )
        result.import_result = import_result
        if not import_result.success:
            error = import_result.error_detail or IngestError(
                code=ErrorCode.E_IMPORT_BATCH_FAILED,
                message=import_result.error or "Import failed",
                stage="import",
                index=index_name,
            )
            return self._fail(result, overall_start, error)

        # ==============================================================
        # Step 5: Register Index Pattern
        # ==============================================================
        pattern = self._patterns.register_pattern(index_name)
        result.index_pattern = pattern
        if pattern.status == IndexPatternStatus.FAILED:
            return self._fail(
                result,
                overall_start,
                IngestError(
                    code=ErrorCode.E_PATTERN_CREATE_FAILED,
                    message=pattern.error or "Index pattern creation failed",
                    stage="index_pattern",
                    index=index_name,
                ),
            )
        if pattern.status == IndexPatternStatus.ID_NOT_FOUND:
            result.warnings.append(ErrorCode.W_PATTERN_ID_NOT_FOUND.value)
            result.error_details.append(
                IngestError(
                    code=ErrorCode.W_PATTERN_ID_NOT_FOUND,
                    message=f"Index pattern '{index_name}' not found after creation",
                    stage="index_pattern",
                    index=index_name,
                )
            )

        # ==============================================================
        # Step 6: Assemble Result
        # ==============================================================
        result.processing_time_seconds = time.monotonic() - overall_start
        logger.info(
            "indexkit | index=%s | index_id=%s | created=%s | docs=%d | "
            "failures=%d | pattern=%s | time=%.1fs",
            index_name,
            index_id,
            result.created_index,
            import_result.doc_count,
            len(import_result.failures),
            pattern.status.value,
            result.processing_time_seconds,
        )
        return result

    async def atrigger_indexing(
        self,
        parsed_file: Any,
        transform: str | TransformStrategy | None,
        index_name: str,
        data_type: str | None = None,
    ) -> UploadResult:
        """Async wrapper around :meth:`trigger_indexing`.

        Offloads the synchronous call to a thread via ``asyncio.to_thread()``.
        """
        return await asyncio.to_thread(
            self.trigger_indexing, parsed_file, transform, index_name, data_type
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fail(
        self, result: UploadResult, start: float, error: IngestError
    ) -> UploadResult:
        logger.error(
            "indexkit | index=%s | code=%s | detail=%s",
            result.index,
            error.code.value,
            error.message,
        )
        result.errors.append(error.code.value)
        result.error_details.append(error)
        result.processing_time_seconds = time.monotonic() - start
        return result
