"""Transform resolution -- from parsed file content to indexing details.

Provides ``resolve_transform()``, which accepts either a built-in transform
key (see ``TransformKey``) or any object implementing the
:class:`~indexkit.protocols.TransformStrategy` protocol, and returns a
:class:`~indexkit.models.TransformResolution`.  Resolution never raises:
every failure becomes a result carrying an ``ErrorCode``.

The only built-in transform is ``GeoJsonTransform``, which turns GeoJSON
features into ``geo_point`` or ``geo_shape`` documents.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from indexkit.errors import ErrorCode
from indexkit.models import IndexingDetails, TransformResolution
from indexkit.protocols import TransformStrategy

logger = logging.getLogger("indexkit")

GEO_DATA_TYPES = frozenset({"geo_point", "geo_shape"})


class TransformKey(str, Enum):
    """Names of the built-in transforms."""

    GEO = "geo"


# ---------------------------------------------------------------------------
# GeoJSON
# ---------------------------------------------------------------------------


def _features(parsed_file: Any) -> list[dict[str, Any]]:
    """Return the feature list of a FeatureCollection, Feature or list."""
    if isinstance(parsed_file, list):
        return parsed_file
    if isinstance(parsed_file, dict):
        if parsed_file.get("type") == "Feature":
            return [parsed_file]
        return list(parsed_file.get("features") or [])
    return []


def geojson_to_documents(parsed_file: Any, data_type: str) -> list[dict[str, Any]]:
    """Convert GeoJSON features into index documents.

    Each document holds the feature's geometry under ``coordinates`` and
    its properties at the top level.  Features without geometry are
    skipped.  Unknown *data_type* yields an empty list.
    """
    if data_type not in GEO_DATA_TYPES:
        return []

    documents: list[dict[str, Any]] = []
    for feature in _features(parsed_file):
        geometry = feature.get("geometry")
        if not geometry:
            continue
        if data_type == "geo_point":
            coordinates: Any = geometry.get("coordinates")
        else:
            coordinates = {
                "type": str(geometry.get("type", "")).lower(),
                "coordinates": geometry.get("coordinates"),
            }
        documents.append({"coordinates": coordinates, **(feature.get("properties") or {})})
    return documents


class GeoJsonTransform:
    """Built-in transform for GeoJSON uploads.

    Satisfies :class:`~indexkit.protocols.TransformStrategy` via
    structural subtyping.
    """

    def get_index_details(
        self, parsed_file: Any, data_type: str | None = None
    ) -> IndexingDetails | None:
        if data_type not in GEO_DATA_TYPES:
            return None
        return IndexingDetails(
            data=geojson_to_documents(parsed_file, data_type),
            settings={"number_of_shards": 1},
            mappings={"properties": {"coordinates": {"type": data_type}}},
            ingest_pipeline={},
        )


BUILTIN_TRANSFORMS: dict[TransformKey, TransformStrategy] = {
    TransformKey.GEO: GeoJsonTransform(),
}


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def _failure(code: ErrorCode, message: str) -> TransformResolution:
    return TransformResolution(success=False, error=message, code=code)


def resolve_transform(
    transform: str | TransformStrategy | None,
    parsed_file: Any,
    data_type: str | None = None,
) -> TransformResolution:
    """Produce indexing details for *parsed_file* using *transform*.

    Parameters
    ----------
    transform:
        A ``TransformKey`` (or its string value) naming a built-in
        transform, or a custom ``TransformStrategy``.
    parsed_file:
        The parsed file content handed to the transform.
    data_type:
        Transform-specific data type (``geo_point`` / ``geo_shape`` for
        the GeoJSON transform).

    Returns
    -------
    TransformResolution
        ``success`` with ``details`` set, or a failure with ``code`` and
        ``error``.
    """
    if transform is None or transform == "":
        return _failure(ErrorCode.E_TRANSFORM_MISSING, "No transform defined")

    if isinstance(transform, str):
        try:
            strategy = BUILTIN_TRANSFORMS[TransformKey(transform)]
        except (ValueError, KeyError):
            return _failure(
                ErrorCode.E_TRANSFORM_UNSUPPORTED,
                f"No handling defined for transform: {transform}",
            )
    elif isinstance(transform, TransformStrategy):
        strategy = transform
    else:
        return _failure(
            ErrorCode.E_TRANSFORM_UNSUPPORTED,
            f"No handling defined for transform: {type(transform).__name__}",
        )

    try:
        details = strategy.get_index_details(parsed_file, data_type)
    except Exception as exc:
        logger.error(
            "indexkit | transform=%s | error=%s",
            type(strategy).__name__,
            exc,
        )
        return _failure(
            ErrorCode.E_TRANSFORM_FAILED,
            f"Transform {type(strategy).__name__} failed: {exc}",
        )

    if details is None:
        return _failure(
            ErrorCode.E_TRANSFORM_NO_DETAILS,
            "Transform produced no indexing details",
        )

    return TransformResolution(success=True, details=details)
