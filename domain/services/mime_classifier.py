"""Mapping of mime types to icon keys and media categories."""

from __future__ import annotations

import re
from functools import lru_cache

from domain.value_objects.blob_metadata import DIR_MIME_TYPE
from domain.value_objects.media_category import MediaCategory
from domain.value_objects.resolver_config import OrderedTable

FALLBACK_KEY = "file"


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


class MimeClassifier:
    """Classify mime types using ordered pattern tables.

    Both tables are walked in declaration order and the first match wins.
    Two configurations holding the same entries in a different order may
    classify an ambiguous mime differently.
    """

    def __init__(self, mime_types: OrderedTable = (), mime_media: OrderedTable = ()) -> None:
        self.mime_types = tuple(
            (key, tuple(_compile(p) for p in patterns)) for key, patterns in mime_types
        )
        self.mime_media = tuple(
            (MediaCategory(category), frozenset(keys)) for category, keys in mime_media
        )

    def icon_key(self, mime_type: str | None, *, is_dir: bool = False) -> str:
        """Return the configured key for a mime, ``dir`` or the ``file`` fallback."""
        if is_dir:
            return DIR_MIME_TYPE

        for key, patterns in self.mime_types:
            if any(p.search(mime_type or "") for p in patterns):
                return key

        return FALLBACK_KEY

    def classify(self, mime_type: str | None, *, is_dir: bool = False) -> MediaCategory:
        """Return the media category of a blob with the given mime type."""
        if is_dir:
            return MediaCategory.DIR

        key = self.icon_key(mime_type)
        for category, members in self.mime_media:
            if key in members or mime_type in members:
                return category

        return MediaCategory.FILE
