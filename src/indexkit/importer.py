"""ChunkedImporter -- bulk import of a record set in fixed-size batches.

Splits the records into batches of ``config.chunk_size`` and writes them
strictly in sequence through an :class:`~indexkit.writer.IndexWriter`.
Each batch gets up to ``config.import_retries`` attempts with no backoff
and no distinction between error kinds.  The first batch that still fails
after its last attempt ends the import: the result reports failure and a
document count of zero.

Per-document failures reported by the server are kept for every batch,
including the batch that ended the import.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from indexkit.config import IndexKitConfig
from indexkit.errors import ErrorCode, IngestError
from indexkit.models import ImportFailure, ImportResult, IndexingDetails
from indexkit.writer import IndexWriter

logger = logging.getLogger("indexkit")

NO_INDEX_MESSAGE = "No index supplied"


def chunk_records(
    records: Sequence[dict[str, Any]], chunk_size: int
) -> list[list[dict[str, Any]]]:
    """Split *records* into consecutive batches of at most *chunk_size*.

    Order is preserved; only the last batch may be shorter.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1")
    return [
        list(records[i : i + chunk_size]) for i in range(0, len(records), chunk_size)
    ]


class ChunkedImporter:
    """Drives an :class:`IndexWriter` over a whole record set.

    Parameters
    ----------
    writer:
        Writer used for every batch.
    config:
        Pipeline configuration providing batch size and retry budget.
        Uses defaults when *None*.
    """

    def __init__(
        self,
        writer: IndexWriter,
        config: IndexKitConfig | None = None,
    ) -> None:
        self._writer = writer
        self._config = config or IndexKitConfig()

    def import_all(
        self,
        id: str | None,
        index: str,
        records: Sequence[dict[str, Any]],
        mappings: dict[str, Any] | None = None,
        settings: dict[str, Any] | None = None,
    ) -> ImportResult:
        """Write *records* to *index* batch by batch.

        Parameters
        ----------
        id:
            Id of the existing index.  ``None`` leaves every batch in
            create mode.
        index:
            Target index name.  Required.
        records:
            Documents to write, in order.
        mappings, settings:
            Sent with every batch.

        Returns
        -------
        ImportResult
            ``error`` is only set when ``success`` is False.
        """
        config = self._config

        if not index:
            return ImportResult(
                success=False,
                error=NO_INDEX_MESSAGE,
                error_detail=IngestError(
                    code=ErrorCode.E_IMPORT_NO_INDEX,
                    message=NO_INDEX_MESSAGE,
                    stage="import",
                ),
            )

        batches = chunk_records(records, config.chunk_size)
        success = True
        failures: list[ImportFailure] = []
        error: str | None = None
        error_detail: IngestError | None = None
        doc_count = 0

        for batch_index, batch in enumerate(batches):
            details = IndexingDetails(
                id=id,
                index=index,
                data=batch,
                settings=settings or {},
                mappings=mappings or {},
                ingest_pipeline={},
            )
            if config.log_sample_data and batch:
                logger.debug(
                    "indexkit | index=%s | batch=%d | sample=%r",
                    index,
                    batch_index + 1,
                    batch[0],
                )
            resp = self._write_batch(details, batch_index)
            failures.extend(resp.failures)

            if resp.success:
                if config.accumulate_doc_count:
                    doc_count += resp.doc_count
                else:
                    doc_count = resp.doc_count
                continue

            logger.error(
                "indexkit | index=%s | batch=%d/%d | code=%s | detail=%s",
                index,
                batch_index + 1,
                len(batches),
                ErrorCode.E_IMPORT_BATCH_FAILED.value,
                resp.error,
            )
            success = False
            error = resp.error
            doc_count = 0
            error_detail = IngestError(
                code=ErrorCode.E_IMPORT_BATCH_FAILED,
                message=resp.error or "Import failed",
                stage="import",
                recoverable=True,
                index=index,
                batch_index=batch_index,
            )
            break

        if success:
            logger.info(
                "indexkit | index=%s | batches=%d | docs=%d | failures=%d",
                index,
                len(batches),
                doc_count,
                len(failures),
            )

        return ImportResult(
            success=success,
            failures=failures,
            doc_count=doc_count,
            error=None if success else error,
            error_detail=error_detail,
        )

    def _write_batch(self, details: IndexingDetails, batch_index: int) -> ImportResult:
        """Write one batch, retrying while the writer reports failure."""
        max_attempts = self._config.import_retries
        resp = ImportResult(success=False)

        for attempt in range(max_attempts):
            if attempt > 0:
                logger.warning(
                    "indexkit | index=%s | batch=%d | code=%s | attempt=%d/%d | error=%s",
                    details.index,
                    batch_index + 1,
                    ErrorCode.W_IMPORT_RETRY.value,
                    attempt + 1,
                    max_attempts,
                    resp.error,
                )
            resp = self._writer.write(details)
            if resp.success:
                break

        return resp
