"""Shared test fixtures for indexkit tests.

Provides mock backends satisfying the ImportBackend and SavedObjectStore
protocols, a scripted writer for importer tests, and sample GeoJSON.
"""

from __future__ import annotations

import uuid
from typing import Any

import pytest

from indexkit.config import IndexKitConfig
from indexkit.models import ImportResult, IndexingDetails, SavedObject


# ---------------------------------------------------------------------------
# Mock Backends
# ---------------------------------------------------------------------------


class MockImportBackend:
    """Mock ImportBackend recording every call.

    ``responses`` is consumed in order; once exhausted, every import
    succeeds and reports the batch length as its document count.
    Responses that are exceptions are raised.
    """

    def __init__(
        self,
        indices: list[dict[str, Any]] | None = None,
        responses: list[Any] | None = None,
        created_id: str = "new-index-uuid",
    ) -> None:
        self.indices = indices or []
        self.responses = list(responses or [])
        self.created_id = created_id
        self.calls: list[dict[str, Any]] = []
        self.list_calls = 0

    def import_data(
        self,
        body: dict[str, Any],
        index_id: str | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        self.calls.append({"body": body, "index_id": index_id, "timeout": timeout})
        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        payload = {"success": True, "failures": [], "docCount": len(body["data"])}
        if index_id is None:
            payload["id"] = self.created_id
        return payload

    def list_indices(self, timeout: float | None = None) -> list[dict[str, Any]]:
        self.list_calls += 1
        return self.indices


class MockSavedObjectStore:
    """In-memory SavedObjectStore.

    Set ``hide_on_find`` to make ``find`` miss freshly created objects.
    """

    def __init__(
        self,
        objects: list[SavedObject] | None = None,
        hide_on_find: bool = False,
        fail_create: Exception | None = None,
    ) -> None:
        self.objects: dict[str, SavedObject] = {o.id: o for o in objects or []}
        self.hide_on_find = hide_on_find
        self.fail_create = fail_create
        self.find_calls: list[dict[str, Any]] = []
        self.create_calls: list[dict[str, Any]] = []

    def find(
        self,
        type: str,
        fields: list[str] | None = None,
        per_page: int = 20,
    ) -> list[SavedObject]:
        self.find_calls.append({"type": type, "fields": fields, "per_page": per_page})
        if self.hide_on_find:
            return []
        return [o for o in self.objects.values() if o.type == type][:per_page]

    def create(
        self,
        type: str,
        attributes: dict[str, Any],
        overwrite: bool = False,
        id: str | None = None,
    ) -> SavedObject:
        self.create_calls.append(
            {"type": type, "attributes": attributes, "overwrite": overwrite, "id": id}
        )
        if self.fail_create is not None:
            raise self.fail_create
        obj = SavedObject(
            id=id or str(uuid.uuid4()),
            type=type,
            attributes={"fields": "[]", **attributes},
        )
        self.objects[obj.id] = obj
        return obj

    def get(self, type: str, id: str) -> SavedObject:
        return self.objects[id]


class ScriptedWriter:
    """IndexWriter stand-in returning queued results.

    Once the queue is empty every write succeeds with ``doc_count`` equal
    to the batch length.
    """

    def __init__(self, results: list[ImportResult] | None = None) -> None:
        self.results = list(results or [])
        self.calls: list[IndexingDetails] = []

    def write(self, details: IndexingDetails) -> ImportResult:
        self.calls.append(details)
        if self.results:
            return self.results.pop(0)
        return ImportResult(success=True, doc_count=len(details.data))


def make_records(count: int) -> list[dict[str, Any]]:
    return [{"n": i} for i in range(count)]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def default_config() -> IndexKitConfig:
    """Return a default IndexKitConfig."""
    return IndexKitConfig()


@pytest.fixture
def mock_backend() -> MockImportBackend:
    return MockImportBackend()


@pytest.fixture
def mock_store() -> MockSavedObjectStore:
    return MockSavedObjectStore()


@pytest.fixture
def sample_feature_collection() -> dict:
    """Return a FeatureCollection with two points and one empty feature."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [-71.06, 42.36]},
                "properties": {"name": "Boston"},
            },
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [-0.13, 51.51]},
                "properties": {"name": "London", "capital": True},
            },
            {"type": "Feature", "geometry": None, "properties": {"name": "Nowhere"}},
        ],
    }
