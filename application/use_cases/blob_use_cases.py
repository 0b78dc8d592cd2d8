from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from returns.result import Failure, Result, Success

from application.dtos.blob_dtos import BlobResponse, ListFolderContentRequest
from application.dtos.errors import AppError
from application.mappers.blob_mappers import BlobMapper
from domain.exceptions import BlobNotFoundError, ConfigurationError
from domain.services.path_normalizer import split_extension, split_path
from domain.value_objects.media_category import MediaCategory

if TYPE_CHECKING:
    from application.ports.storage_backend import StorageBackend
    from application.services.blob_resolver import BlobResolver, BlobResolverFactory
    from application.services.metadata_resolver import MetadataResolver
    from application.services.proxy_url_builder import ProxyUrlBuilder
    from domain.services.path_normalizer import PathNormalizer
    from domain.value_objects.resolver_config import ResolverConfig

logger = structlog.get_logger()


class GetBlobDetailsUseCase:
    """Resolve a single path into its client representation."""

    def __init__(
        self,
        blob_resolver_factory: BlobResolverFactory,
        metadata_resolver: MetadataResolver,
    ) -> None:
        self.blob_resolver_factory = blob_resolver_factory
        self.metadata_resolver = metadata_resolver

    def execute(self, path: str) -> Result[BlobResponse, AppError]:
        """Resolve ``path`` with direct backend queries.

        Args:
            path: Raw path as sent by the client (sandbox root optional)

        Returns:
            Result containing the blob representation or an error

        """
        try:
            return self.blob_resolver_factory.resolve(path).map(
                lambda blob: BlobMapper.to_blob_response(blob, self.metadata_resolver),
            )
        except ConfigurationError as e:
            logger.error("blob_details_configuration_error", path=path, error=str(e))
            return Failure(AppError("configuration", str(e)))
        except Exception as e:
            logger.exception("blob_details_failed", path=path)
            return Failure(AppError("storage_error", f"Failed to resolve blob: {e!s}"))


class ListFolderContentUseCase:
    """List a folder as client representations.

    Issues a single backend listing call and resolves every entry from it.
    Outside the sandbox root a synthetic ``..`` entry pointing at the parent
    folder is appended.
    """

    def __init__(
        self,
        storage_backend: StorageBackend,
        blob_resolver_factory: BlobResolverFactory,
        metadata_resolver: MetadataResolver,
        normalizer: PathNormalizer,
        url_builder: ProxyUrlBuilder,
        config: ResolverConfig,
    ) -> None:
        self.storage_backend = storage_backend
        self.blob_resolver_factory = blob_resolver_factory
        self.metadata_resolver = metadata_resolver
        self.normalizer = normalizer
        self.url_builder = url_builder
        self.config = config

    def execute(self, request: ListFolderContentRequest) -> Result[list[BlobResponse], AppError]:
        folder_path = self.normalizer.normalize(request.path)

        try:
            if not self.storage_backend.exists(folder_path):
                logger.info("folder_not_found", path=folder_path)
                return Failure(AppError("not_found", f"Folder not found: {request.path!r}"))

            if self._is_file_path(folder_path):
                logger.info("folder_is_a_file", path=folder_path)
                return Failure(AppError("not_found", f"Not a folder: {request.path!r}"))

            blobs: list[BlobResponse] = []
            for entry in self.storage_backend.list(folder_path):
                blob = self.blob_resolver_factory.resolve(entry).unwrap()
                if self._matches(blob, request.media_type):
                    blobs.append(BlobMapper.to_blob_response(blob, self.metadata_resolver))

            relative = self.normalizer.strip_root(folder_path)
            if relative:
                blobs.append(self._parent_entry(relative))

            logger.info("folder_content_listed", path=folder_path, count=len(blobs))
            return Success(blobs)
        except BlobNotFoundError as e:
            logger.info("folder_not_found", path=folder_path)
            return Failure(AppError("not_found", str(e)))
        except ConfigurationError as e:
            logger.error("folder_content_configuration_error", path=folder_path, error=str(e))
            return Failure(AppError("configuration", str(e)))
        except Exception as e:
            logger.exception("folder_content_failed", path=folder_path)
            return Failure(AppError("storage_error", f"Failed to list folder: {e!s}"))

    def _parent_entry(self, relative: str) -> BlobResponse:
        path_up = self.normalizer.parent(relative)
        dir_icon_url = self.config.icon_url("dir")
        if dir_icon_url is None:
            raise ConfigurationError("dir")
        return BlobMapper.to_parent_response(
            path_up=path_up,
            url=self.url_builder.folder(self.normalizer.normalize(path_up)),
            dir_icon_url=dir_icon_url,
        )

    @staticmethod
    def _is_file_path(path: str) -> bool:
        # Same rule as direct-mode metadata: a final extension means a file
        return split_extension(split_path(path)[1])[1] is not None

    @staticmethod
    def _matches(blob: BlobResolver, media_type: MediaCategory | None) -> bool:
        if media_type in (None, MediaCategory.FILE) or blob.metadata.is_dir:
            return True
        return blob.media_type() == media_type
