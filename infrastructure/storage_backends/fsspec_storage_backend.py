from __future__ import annotations

from datetime import datetime
from typing import Any
from urllib.parse import quote

import fsspec
import structlog

from application.ports.storage_backend import ListingEntry, StorageBackend
from domain.exceptions import BlobNotFoundError, UrlNotSupportedError
from domain.services.path_normalizer import canonicalize
from domain.value_objects.blob_type import BlobType

logger = structlog.get_logger()

# Keys different fsspec implementations use in ``ls``/``info`` results
_TIMESTAMP_KEYS = ("mtime", "LastModified", "last_modified", "updated", "modified", "created")
_MIME_KEYS = ("ContentType", "contentType", "content_type", "mimetype")


def _to_timestamp(value: Any) -> int | None:  # noqa: ANN401
    if isinstance(value, datetime):
        return int(value.timestamp())
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp())
        except ValueError:
            return None
    return None


def _info_timestamp(info: dict[str, Any]) -> int | None:
    for key in _TIMESTAMP_KEYS:
        timestamp = _to_timestamp(info.get(key))
        if timestamp is not None:
            return timestamp
    return None


def _info_mime_type(info: dict[str, Any]) -> str | None:
    for key in _MIME_KEYS:
        if info.get(key):
            return str(info[key])
    return None


class FsspecStorageBackend(StorageBackend):
    """StorageBackend over any filesystem fsspec can address.

    ``base_url`` is the backend root (``file:///srv/files``, ``s3://bucket``,
    ``memory://``); every path handed in is relative to it.
    """

    def __init__(
        self,
        base_url: str,
        *,
        storage_options: dict | None = None,
        public_base_url: str | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.storage_options = storage_options or {}
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None
        self.fs, root_path = fsspec.core.url_to_fs(self.base_url, **self.storage_options)
        self.root_path = root_path.rstrip("/")

    def _fs_path(self, path: str) -> str:
        return "/".join(part for part in (self.root_path, canonicalize(path)) if part)

    def _relative(self, fs_path: str) -> str:
        fs_path = self.fs._strip_protocol(fs_path).rstrip("/")  # noqa: SLF001
        if self.root_path and fs_path.startswith(self.root_path):
            fs_path = fs_path[len(self.root_path) :]
        return canonicalize(fs_path)

    def exists(self, path: str) -> bool:
        return self.fs.exists(self._fs_path(path))

    def file_size(self, path: str) -> int:
        try:
            return int(self.fs.size(self._fs_path(path)) or 0)
        except FileNotFoundError as e:
            raise BlobNotFoundError(path) from e

    def last_modified(self, path: str) -> int:
        fs_path = self._fs_path(path)
        try:
            return int(self.fs.modified(fs_path).timestamp())
        except FileNotFoundError as e:
            raise BlobNotFoundError(path) from e
        except NotImplementedError:
            # Not every implementation has modified(); fall back to info()
            return _info_timestamp(self.fs.info(fs_path)) or 0

    def url(self, path: str) -> str:
        """Return a public URL for ``path``.

        A configured public base URL wins; otherwise the filesystem's own
        ``url()`` is used where the implementation provides one (gcsfs,
        s3fs presigned URLs).
        """
        if self.public_base_url:
            return f"{self.public_base_url}/{quote(canonicalize(path))}"

        native_url = getattr(self.fs, "url", None)
        if native_url is None:
            msg = f"{type(self.fs).__name__} does not support URL generation"
            raise UrlNotSupportedError(msg)

        try:
            return native_url(self._fs_path(path))
        except NotImplementedError as e:
            msg = f"{type(self.fs).__name__} does not support URL generation"
            raise UrlNotSupportedError(msg) from e

    def list(self, dir_path: str) -> list[ListingEntry]:
        """List the direct children of ``dir_path`` in a single backend call."""
        dir_path = canonicalize(dir_path)
        try:
            infos = self.fs.ls(self._fs_path(dir_path), detail=True)
        except FileNotFoundError as e:
            raise BlobNotFoundError(dir_path) from e

        entries: list[ListingEntry] = []
        for info in infos:
            path = self._relative(info["name"])
            # Some implementations include the listed directory itself
            if path == dir_path:
                continue

            if info.get("type") == "directory":
                entries.append(
                    ListingEntry(path=path, type=BlobType.DIR, last_modified=_info_timestamp(info)),
                )
            else:
                entries.append(
                    ListingEntry(
                        path=path,
                        type=BlobType.FILE,
                        size=info.get("size"),
                        mime_type=_info_mime_type(info),
                        last_modified=_info_timestamp(info),
                    ),
                )

        logger.debug("storage_listed", path=dir_path, count=len(entries))
        return sorted(entries, key=lambda entry: entry.path)
