"""Pydantic models for the indexkit package.

Contains the data carried between the four upload stages:
``IndexingDetails`` (transform output), ``ImportResult`` (bulk import),
``IndexPatternResult`` (pattern registration) and ``UploadResult``
(whole upload), plus the small records the backends exchange.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from indexkit.errors import ErrorCode, IngestError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class IndexPatternStatus(str, Enum):
    """Outcome of registering an index pattern."""

    CREATED = "created"
    ID_NOT_FOUND = "id_not_found"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Transform Output
# ---------------------------------------------------------------------------


class IndexingDetails(BaseModel):
    """Everything needed to write one set of records to an index.

    ``id`` is only set once the index is known to exist; its presence
    switches the import endpoint from create to append mode.
    """

    model_config = ConfigDict(frozen=True)

    index: str = ""
    data: list[dict[str, Any]] = []
    settings: dict[str, Any] = {}
    mappings: dict[str, Any] = {}
    ingest_pipeline: dict[str, Any] = {}
    id: str | None = None


class TransformResolution(BaseModel):
    """Result of resolving a transform against parsed file content."""

    success: bool
    details: IndexingDetails | None = None
    error: str | None = None
    code: ErrorCode | None = None


# ---------------------------------------------------------------------------
# Import Results
# ---------------------------------------------------------------------------


class ImportFailure(BaseModel):
    """A single document rejected by the import endpoint."""

    item: int | None = None
    reason: str = ""
    doc: dict[str, Any] | None = None


class ImportResult(BaseModel):
    """Outcome of one import request or of a whole chunked import.

    ``error`` is only set when ``success`` is False, in which case
    ``doc_count`` is 0.  ``error_detail`` locates the failure (index and
    batch) for results produced by the chunked importer.
    """

    success: bool
    failures: list[ImportFailure] = []
    doc_count: int = 0
    error: str | None = None
    error_detail: IngestError | None = None
    id: str | None = None


class IndexCheck(BaseModel):
    """Whether an index already exists and, if so, its id."""

    exists: bool
    id: str | None = None


# ---------------------------------------------------------------------------
# Index Patterns
# ---------------------------------------------------------------------------


class SavedObject(BaseModel):
    """A stored object as returned by the saved-object store."""

    id: str
    type: str
    attributes: dict[str, Any] = {}


class IndexPatternResult(BaseModel):
    """Outcome of registering an index pattern.

    ``status`` separates a pattern whose id was resolved from one that was
    created but could not be found again by title.
    """

    success: bool
    status: IndexPatternStatus
    id: str | None = None
    fields: list[dict[str, Any]] = []
    error: str | None = None


# ---------------------------------------------------------------------------
# Upload Result
# ---------------------------------------------------------------------------


class UploadResult(BaseModel):
    """Final result of one upload via ``UploadRouter.trigger_indexing()``."""

    index: str
    index_id: str | None = None
    created_index: bool = False
    import_result: ImportResult | None = None
    index_pattern: IndexPatternResult | None = None
    errors: list[str] = []
    warnings: list[str] = []
    error_details: list[IngestError] = []
    processing_time_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return not self.errors
