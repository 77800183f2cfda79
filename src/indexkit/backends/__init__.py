"""Concrete backend implementations for indexkit.

Both backends speak HTTP to a Kibana-style server via ``httpx``.
"""

from __future__ import annotations

from indexkit.backends.kibana import KibanaImportBackend, KibanaSavedObjectStore

__all__ = [
    "KibanaImportBackend",
    "KibanaSavedObjectStore",
]
