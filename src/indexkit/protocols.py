"""Backend protocols for the indexkit pipeline.

Defines the three seams between the upload core and the outside world:
the import/listing endpoints (``ImportBackend``), the saved-object store
holding index patterns (``SavedObjectStore``) and pluggable record
transforms (``TransformStrategy``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from indexkit.models import IndexingDetails, SavedObject

__all__ = [
    "ImportBackend",
    "SavedObjectStore",
    "TransformStrategy",
]


@runtime_checkable
class ImportBackend(Protocol):
    """Interface for the file-upload import and index listing endpoints."""

    def import_data(
        self,
        body: dict[str, Any],
        index_id: str | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Post one import request and return the decoded response.

        Args:
            body: Request body (``index``, ``data``, ``settings``,
                ``mappings``, ``ingestPipeline`` and optional extras).
            index_id: Existing index id.  ``None`` creates the index.
            timeout: Request timeout in seconds.

        Returns:
            The response object: ``success``, ``failures``, ``docCount``,
            optional ``error`` and, on creation, ``id``.
        """
        ...

    def list_indices(self, timeout: float | None = None) -> list[dict[str, Any]]:
        """Return every index known to the server (``name``, ``uuid``, ...)."""
        ...


@runtime_checkable
class SavedObjectStore(Protocol):
    """Interface for the generic saved-object store.

    Concrete implementations might use the server's REST API or an
    in-process dictionary in tests.
    """

    def find(
        self,
        type: str,
        fields: list[str] | None = None,
        per_page: int = 20,
    ) -> list[SavedObject]:
        """Return a single page of stored objects of *type*."""
        ...

    def create(
        self,
        type: str,
        attributes: dict[str, Any],
        overwrite: bool = False,
        id: str | None = None,
    ) -> SavedObject:
        """Create (or, with *overwrite*, replace) an object."""
        ...

    def get(self, type: str, id: str) -> SavedObject:
        """Fetch one object by id."""
        ...


@runtime_checkable
class TransformStrategy(Protocol):
    """Turns parsed file content into indexing details.

    Built-in strategies are registered under a ``TransformKey``; callers
    may also pass any object implementing this protocol.
    """

    def get_index_details(
        self, parsed_file: Any, data_type: str | None = None
    ) -> IndexingDetails | None:
        """Return the details to index, or None when nothing applies."""
        ...
