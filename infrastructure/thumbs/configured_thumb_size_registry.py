from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from application.ports.thumb_size_registry import ThumbSizeRegistry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from domain.value_objects.thumb_variant import ThumbSize


class ConfiguredThumbSizeRegistry(ThumbSizeRegistry):
    """Thumbnail sizes declared in configuration, in declaration order."""

    def __init__(self, sizes: Mapping[str, ThumbSize]) -> None:
        self._sizes = MappingProxyType(dict(sizes))

    def sizes(self) -> dict[str, ThumbSize]:
        return dict(self._sizes)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._sizes)
