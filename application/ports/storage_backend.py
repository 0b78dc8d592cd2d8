from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from domain.value_objects.blob_type import BlobType


@dataclass(frozen=True)
class ListingEntry:
    """A record returned by a bulk directory listing.

    Carries enough metadata to describe the entry without a per-entry stat
    call. Optional fields are None when the backend does not report them.
    """

    path: str
    type: BlobType
    size: int | None = None
    mime_type: str | None = None
    last_modified: int | None = None

    @property
    def is_file(self) -> bool:
        return self.type == BlobType.FILE


class StorageBackend(Protocol):
    """Port for the storage backend blobs are resolved against.

    Paths are normalized, slash separated and relative to the backend root.
    Failures other than those documented here (connectivity, permissions)
    propagate to the caller unchanged.
    """

    def exists(self, path: str) -> bool: ...
    def file_size(self, path: str) -> int: ...
    def last_modified(self, path: str) -> int:
        """Return the modification time of ``path`` as a Unix timestamp."""
        ...

    def url(self, path: str) -> str:
        """Return a native URL for ``path``.

        Raises:
            UrlNotSupportedError: If the backend cannot generate URLs.

        """
        ...

    def list(self, dir_path: str) -> list[ListingEntry]:
        """Return the direct children of ``dir_path``."""
        ...
