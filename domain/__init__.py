"""Domain layer exports."""

from domain.exceptions import (
    BlobNotFoundError,
    ConfigurationError,
    DomainError,
    UrlNotSupportedError,
)
from domain.value_objects import (
    BlobMetadata,
    BlobType,
    MediaCategory,
    ResolverConfig,
    ThumbSize,
    ThumbVariant,
)

__all__ = [
    "BlobMetadata",
    "BlobNotFoundError",
    "BlobType",
    "ConfigurationError",
    "DomainError",
    "MediaCategory",
    "ResolverConfig",
    "ThumbSize",
    "ThumbVariant",
    "UrlNotSupportedError",
]
