from __future__ import annotations

from typing import TYPE_CHECKING

from application.dtos.blob_dtos import BlobResponse
from domain.value_objects.blob_metadata import DIR_MIME_TYPE
from domain.value_objects.blob_type import BlobType
from domain.value_objects.media_category import MediaCategory

if TYPE_CHECKING:
    from application.services.blob_resolver import BlobResolver
    from application.services.metadata_resolver import MetadataResolver

PARENT_DIR_NAME = ".."


class BlobMapper:
    """Mapper for converting resolved blobs to DTOs."""

    @staticmethod
    def to_blob_response(blob: BlobResolver, metadata_resolver: MetadataResolver) -> BlobResponse:
        """Map a BlobResolver to the representation consumed by clients.

        Args:
            blob: The resolved blob
            metadata_resolver: Supplies the client paths with the sandbox root hidden

        Returns:
            BlobResponse: The mapped response DTO

        Raises:
            ConfigurationError: If an icon needed for a thumbnail URL is missing

        """
        metadata = blob.metadata
        return BlobResponse(
            path=metadata_resolver.path_for_client(metadata),
            dir=metadata_resolver.dir_for_client(metadata),
            type=metadata.type,
            name=metadata.name,
            full_name=metadata.full_name,
            extension=metadata.extension,
            mime_type=metadata.mime_type,
            media_type=blob.media_type(),
            size=metadata.size,
            last_modified=metadata.last_modified,
            url=blob.url(),
            thumb_url=blob.thumb_url(),
            xs_thumb_url=blob.xs_thumb_url(),
        )

    @staticmethod
    def to_parent_response(path_up: str, url: str, dir_icon_url: str) -> BlobResponse:
        """Build the synthetic ``..`` entry pointing at ``path_up``."""
        return BlobResponse(
            path=path_up,
            dir=path_up,
            type=BlobType.DIR,
            name=PARENT_DIR_NAME,
            full_name=path_up,
            mime_type=DIR_MIME_TYPE,
            media_type=MediaCategory.DIR,
            url=url,
            thumb_url=dir_icon_url,
            xs_thumb_url=dir_icon_url,
            is_system=True,
        )
