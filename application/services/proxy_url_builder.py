from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

if TYPE_CHECKING:
    from domain.services.path_normalizer import PathNormalizer
    from domain.value_objects.resolver_config import ResolverConfig


class ProxyUrlBuilder:
    """Build URLs to the file-serving and folder-listing routes.

    Used whenever the storage backend is private or cannot hand out native
    URLs. The sandbox root never appears in the generated URL.
    """

    def __init__(self, config: ResolverConfig, normalizer: PathNormalizer) -> None:
        self.files_url = config.files_url.rstrip("/")
        self.folders_url = config.folders_url.rstrip("/")
        self.normalizer = normalizer

    def file(self, path: str) -> str:
        return self._join(self.files_url, path)

    def folder(self, path: str) -> str:
        return self._join(self.folders_url, path)

    def _join(self, base_url: str, path: str) -> str:
        relative = self.normalizer.strip_root(path)
        if not relative:
            return base_url
        return f"{base_url}/{quote(relative)}"
