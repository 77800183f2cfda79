"""IndexPatternManager -- register index patterns for imported indices.

Creation always overwrites; the pattern's id is then found again by
scanning one page of stored patterns for a matching title.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from indexkit.config import IndexKitConfig
from indexkit.errors import ErrorCode
from indexkit.models import IndexPatternResult, IndexPatternStatus, SavedObject
from indexkit.protocols import SavedObjectStore

logger = logging.getLogger("indexkit")

LISTING_FIELDS = ["id", "title", "type", "fields"]


def pattern_fields(saved_object: SavedObject) -> list[dict[str, Any]]:
    """Return the field descriptors stored on an index pattern.

    The store keeps ``fields`` as a JSON-encoded string; a decoded list is
    accepted as well.
    """
    fields = saved_object.attributes.get("fields")
    if isinstance(fields, str):
        try:
            fields = json.loads(fields)
        except ValueError:
            return []
    return fields if isinstance(fields, list) else []


class IndexPatternManager:
    """Creates index patterns and resolves their ids.

    Parameters
    ----------
    store:
        Saved-object store holding index patterns.
    config:
        Pipeline configuration.  Uses defaults when *None*.
    """

    def __init__(
        self,
        store: SavedObjectStore,
        config: IndexKitConfig | None = None,
    ) -> None:
        self._store = store
        self._config = config or IndexKitConfig()

    def register_pattern(self, name: str, index_pattern: str = "") -> IndexPatternResult:
        """Create the pattern titled *index_pattern* (or *name*) and look up its id.

        Returns ``status=created`` with the id and fields when the pattern
        is found again, ``status=id_not_found`` (still ``success``) when it
        is not, and ``status=failed`` when the store raised.
        """
        title = index_pattern or name
        pattern_type = self._config.index_pattern_type
        try:
            self._store.create(
                pattern_type, {"title": title}, overwrite=True, id=None
            )
            pattern_id = self.get_pattern_id(title)
            if pattern_id is None:
                logger.warning(
                    "indexkit | pattern=%s | code=%s",
                    title,
                    ErrorCode.W_PATTERN_ID_NOT_FOUND.value,
                )
                return IndexPatternResult(
                    success=True, status=IndexPatternStatus.ID_NOT_FOUND
                )
            saved = self._store.get(pattern_type, pattern_id)
        except Exception as exc:
            logger.error(
                "indexkit | pattern=%s | code=%s | detail=%s",
                title,
                ErrorCode.E_PATTERN_CREATE_FAILED.value,
                exc,
            )
            return IndexPatternResult(
                success=False,
                status=IndexPatternStatus.FAILED,
                error=str(exc),
            )

        logger.info("indexkit | pattern=%s | id=%s | registered", title, pattern_id)
        return IndexPatternResult(
            success=True,
            status=IndexPatternStatus.CREATED,
            id=pattern_id,
            fields=pattern_fields(saved),
        )

    def get_pattern_id(self, name: str) -> str | None:
        """Return the id of the first stored pattern titled *name*."""
        patterns = self._store.find(
            self._config.index_pattern_type,
            per_page=self._config.pattern_lookup_page_size,
        )
        for pattern in patterns or []:
            if pattern.attributes.get("title") == name:
                return pattern.id
        return None

    def list_pattern_titles(self) -> list[str]:
        """Return the titles of up to ``pattern_listing_page_size`` patterns."""
        patterns = self._store.find(
            self._config.index_pattern_type,
            fields=LISTING_FIELDS,
            per_page=self._config.pattern_listing_page_size,
        )
        return [p.attributes.get("title", "") for p in patterns]
