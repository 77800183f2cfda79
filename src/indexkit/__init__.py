"""indexkit -- chunked, retried bulk import of uploaded file records.

Public API re-exports for convenient access.
"""

from indexkit.config import IndexKitConfig
from indexkit.errors import BackendHTTPError, ErrorCode, IndexKitException, IngestError
from indexkit.importer import ChunkedImporter, chunk_records
from indexkit.index_patterns import IndexPatternManager
from indexkit.models import (
    ImportFailure,
    ImportResult,
    IndexCheck,
    IndexingDetails,
    IndexPatternResult,
    IndexPatternStatus,
    SavedObject,
    TransformResolution,
    UploadResult,
)
from indexkit.protocols import ImportBackend, SavedObjectStore, TransformStrategy
from indexkit.router import UploadRouter
from indexkit.transforms import GeoJsonTransform, TransformKey, resolve_transform
from indexkit.writer import IndexWriter

__all__ = [
    "UploadRouter",
    "IndexKitConfig",
    # Errors
    "ErrorCode",
    "IngestError",
    "IndexKitException",
    "BackendHTTPError",
    # Models
    "IndexingDetails",
    "TransformResolution",
    "ImportFailure",
    "ImportResult",
    "IndexCheck",
    "SavedObject",
    "IndexPatternStatus",
    "IndexPatternResult",
    "UploadResult",
    # Components
    "IndexWriter",
    "ChunkedImporter",
    "chunk_records",
    "IndexPatternManager",
    "TransformKey",
    "GeoJsonTransform",
    "resolve_transform",
    # Protocols
    "ImportBackend",
    "SavedObjectStore",
    "TransformStrategy",
]
