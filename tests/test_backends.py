"""Tests for indexkit.backends.kibana using mocked httpx."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from indexkit.backends import KibanaImportBackend, KibanaSavedObjectStore
from indexkit.config import IndexKitConfig
from indexkit.errors import BackendHTTPError
from indexkit.protocols import ImportBackend, SavedObjectStore


@pytest.fixture
def config() -> IndexKitConfig:
    return IndexKitConfig(base_url="http://kibana:5601", backend_timeout_seconds=5.0)


def _response(payload) -> MagicMock:
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


class TestProtocols:
    def test_import_backend(self, config):
        assert isinstance(KibanaImportBackend(config), ImportBackend)

    def test_saved_object_store(self, config):
        assert isinstance(KibanaSavedObjectStore(config), SavedObjectStore)


class TestKibanaImportBackend:
    def test_import_create_mode(self, config):
        backend = KibanaImportBackend(config)
        with patch("httpx.request", return_value=_response({"success": True})) as req:
            payload = backend.import_data({"index": "sales", "data": []})

        assert payload == {"success": True}
        args, kwargs = req.call_args
        assert args == ("POST", "http://kibana:5601/api/fileupload/import")
        assert kwargs["params"] is None
        assert kwargs["json"] == {"index": "sales", "data": []}
        assert kwargs["headers"]["kbn-xsrf"] == "true"
        assert kwargs["timeout"] == 5.0

    def test_import_append_mode(self, config):
        backend = KibanaImportBackend(config)
        with patch("httpx.request", return_value=_response({"success": True})) as req:
            backend.import_data({"index": "sales"}, index_id="abc", timeout=1.0)

        _, kwargs = req.call_args
        assert kwargs["params"] == {"id": "abc"}
        assert kwargs["timeout"] == 1.0

    def test_list_indices(self, config):
        backend = KibanaImportBackend(config)
        indices = [{"name": "sales", "uuid": "u1"}]
        with patch("httpx.request", return_value=_response(indices)) as req:
            assert backend.list_indices() == indices

        args, _ = req.call_args
        assert args == ("GET", "http://kibana:5601/api/index_management/indices")

    def test_extra_headers(self):
        config = IndexKitConfig(headers={"Authorization": "ApiKey xyz"})
        backend = KibanaImportBackend(config)
        with patch("httpx.request", return_value=_response([])) as req:
            backend.list_indices()
        assert req.call_args.kwargs["headers"]["Authorization"] == "ApiKey xyz"

    def test_timeout_raises_timeout_error(self, config):
        backend = KibanaImportBackend(config)
        with patch("httpx.request", side_effect=httpx.TimeoutException("timeout")):
            with pytest.raises(TimeoutError):
                backend.import_data({"index": "sales"})

    def test_connect_error_raises_connection_error(self, config):
        backend = KibanaImportBackend(config)
        with patch("httpx.request", side_effect=httpx.ConnectError("refused")):
            with pytest.raises(ConnectionError):
                backend.list_indices()

    def test_http_status_raises_connection_error(self, config):
        backend = KibanaImportBackend(config)
        request = httpx.Request("POST", "http://kibana:5601/api/fileupload/import")
        response = httpx.Response(413, request=request, text="payload too large")
        with patch("httpx.request", return_value=response):
            with pytest.raises(BackendHTTPError, match="HTTP 413") as exc_info:
                backend.import_data({"index": "sales"})
        assert exc_info.value.status_code == 413
        assert isinstance(exc_info.value, ConnectionError)


class TestKibanaSavedObjectStore:
    def test_find(self, config):
        store = KibanaSavedObjectStore(config)
        payload = {
            "page": 1,
            "saved_objects": [
                {"id": "p1", "type": "index-pattern", "attributes": {"title": "sales"},
                 "references": []},
            ],
        }
        with patch("httpx.request", return_value=_response(payload)) as req:
            objects = store.find("index-pattern", fields=["title"], per_page=1000)

        assert objects[0].id == "p1"
        assert objects[0].attributes == {"title": "sales"}
        args, kwargs = req.call_args
        assert args == ("GET", "http://kibana:5601/api/saved_objects/_find")
        assert kwargs["params"] == {
            "type": "index-pattern", "per_page": 1000, "fields": ["title"]
        }

    def test_create_with_overwrite(self, config):
        store = KibanaSavedObjectStore(config)
        payload = {"id": "p9", "type": "index-pattern", "attributes": {"title": "sales"}}
        with patch("httpx.request", return_value=_response(payload)) as req:
            obj = store.create("index-pattern", {"title": "sales"}, overwrite=True)

        assert obj.id == "p9"
        args, kwargs = req.call_args
        assert args == ("POST", "http://kibana:5601/api/saved_objects/index-pattern")
        assert kwargs["params"] == {"overwrite": "true"}
        assert kwargs["json"] == {"attributes": {"title": "sales"}}

    def test_create_with_id(self, config):
        store = KibanaSavedObjectStore(config)
        payload = {"id": "fixed", "type": "index-pattern", "attributes": {}}
        with patch("httpx.request", return_value=_response(payload)) as req:
            store.create("index-pattern", {"title": "sales"}, id="fixed")

        args, kwargs = req.call_args
        assert args[1].endswith("/saved_objects/index-pattern/fixed")
        assert kwargs["params"] is None

    def test_get(self, config):
        store = KibanaSavedObjectStore(config)
        payload = {"id": "p1", "type": "index-pattern", "attributes": {"title": "sales"}}
        with patch("httpx.request", return_value=_response(payload)) as req:
            obj = store.get("index-pattern", "p1")

        assert obj.attributes["title"] == "sales"
        args, _ = req.call_args
        assert args == ("GET", "http://kibana:5601/api/saved_objects/index-pattern/p1")
