from .blob_metadata import DIR_MIME_TYPE, BlobMetadata
from .blob_type import BlobType
from .media_category import MediaCategory
from .resolver_config import ResolverConfig
from .thumb_variant import ThumbSize, ThumbVariant

__all__ = [
    "DIR_MIME_TYPE",
    "BlobMetadata",
    "BlobType",
    "MediaCategory",
    "ResolverConfig",
    "ThumbSize",
    "ThumbVariant",
]
