"""Structural metadata extraction for blobs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from domain.exceptions import BlobNotFoundError
from domain.services.path_normalizer import (
    canonicalize,
    split_extension,
    split_path,
)
from domain.value_objects.blob_metadata import DIR_MIME_TYPE, BlobMetadata
from domain.value_objects.blob_type import BlobType

if TYPE_CHECKING:
    from application.ports.storage_backend import ListingEntry, StorageBackend
    from domain.services.path_normalizer import PathNormalizer
    from domain.value_objects.resolver_config import ResolverConfig

logger = structlog.get_logger()

DEFAULT_MIME_TYPE = "text/plain"


class MetadataResolver:
    """Build BlobMetadata either from backend queries or from a listing entry.

    ``resolve_from_path`` issues existence/size/timestamp calls and is meant
    for single lookups. ``resolve_from_listing_entry`` reuses what a directory
    listing already returned and never touches the backend, so resolving a
    whole folder costs one listing call instead of one stat call per entry.
    """

    def __init__(
        self,
        storage_backend: StorageBackend,
        config: ResolverConfig,
        normalizer: PathNormalizer,
    ) -> None:
        self.storage_backend = storage_backend
        self.config = config
        self.normalizer = normalizer

    def resolve_from_path(self, path: str) -> Result[BlobMetadata, AppError]:
        """Resolve metadata of ``path`` with direct backend queries.

        The type is inferred from the final segment: no extension means a
        directory.

        Args:
            path: Normalized path of the blob

        Returns:
            Result containing the metadata, or a ``not_found`` error

        """
        path = canonicalize(path)
        dir_, name = split_path(path)
        stem, extension = split_extension(name)

        try:
            if not self.storage_backend.exists(path):
                raise BlobNotFoundError(path)

            if extension is None:
                metadata = BlobMetadata(
                    type=BlobType.DIR,
                    path=path,
                    name=name,
                    dir=dir_,
                    last_modified=self._dir_last_modified(path),
                )
            else:
                extension = extension.lower()
                metadata = BlobMetadata(
                    type=BlobType.FILE,
                    path=path,
                    name=stem,
                    dir=dir_,
                    extension=extension,
                    mime_type=self.guess_mime_type(extension),
                    size=self.storage_backend.file_size(path),
                    last_modified=self.storage_backend.last_modified(path),
                )
        except BlobNotFoundError as e:
            logger.info("blob_metadata_not_found", path=path)
            return Failure(AppError("not_found", str(e)))

        logger.debug("blob_metadata_resolved", path=path, type=metadata.type, mode="direct")
        return Success(metadata)

    def resolve_from_listing_entry(self, entry: ListingEntry) -> BlobMetadata:
        """Resolve metadata from a directory listing record without backend calls."""
        path = canonicalize(entry.path)
        dir_, name = split_path(path)

        if not entry.is_file:
            return BlobMetadata(
                type=BlobType.DIR,
                path=path,
                name=name,
                dir=dir_,
                last_modified=entry.last_modified or 0,
            )

        stem, extension = split_extension(name)
        if extension is not None:
            extension = extension.lower()

        return BlobMetadata(
            type=BlobType.FILE,
            path=path,
            name=stem,
            dir=dir_,
            extension=extension,
            mime_type=entry.mime_type or self.guess_mime_type(extension or ""),
            size=entry.size or 0,
            last_modified=entry.last_modified or 0,
        )

    def _dir_last_modified(self, path: str) -> int:
        # Object stores have no real directories and may not report a time
        try:
            return self.storage_backend.last_modified(path)
        except (BlobNotFoundError, NotImplementedError):
            return 0

    def guess_mime_type(self, extension: str = "", *, is_file: bool = True) -> str:
        """Guess a mime type from a lower-case extension."""
        if not is_file:
            return DIR_MIME_TYPE
        return self.config.mime_map.get(extension, DEFAULT_MIME_TYPE)

    def path_for_client(self, metadata: BlobMetadata) -> str:
        """Return the blob path without the sandbox root."""
        return self.normalizer.strip_root(metadata.path)

    def dir_for_client(self, metadata: BlobMetadata) -> str:
        """Return the blob directory without the sandbox root."""
        return self.normalizer.strip_root(metadata.dir)
