"""Presentation-level view of a single resolved blob."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import structlog
from returns.result import Result, Success

from application.ports.storage_backend import ListingEntry
from domain.exceptions import ConfigurationError, UrlNotSupportedError
from domain.value_objects.media_category import MediaCategory
from domain.value_objects.thumb_variant import ThumbVariant

if TYPE_CHECKING:
    from application.dtos.errors import AppError
    from application.ports.storage_backend import StorageBackend
    from application.ports.thumb_size_registry import ThumbSizeRegistry
    from application.services.metadata_resolver import MetadataResolver
    from application.services.proxy_url_builder import ProxyUrlBuilder
    from domain.services.mime_classifier import MimeClassifier
    from domain.services.path_normalizer import PathNormalizer
    from domain.value_objects.blob_metadata import BlobMetadata
    from domain.value_objects.resolver_config import ResolverConfig

logger = structlog.get_logger()

DEFAULT_THUMB_SIZE = "thumb"
XS_THUMB_SIZE = "xs"
DIR_ICON_KEY = "dir"
IMAGE_ICON_KEY = "img"


class BlobResolver:
    """A resolved blob: its metadata plus derived media type, URLs and thumbnails.

    One instance is created per looked-up path or per listing entry and is
    dropped at the end of the request. Thumbnail variants are computed on first
    use and cached on the instance only.
    """

    def __init__(
        self,
        metadata: BlobMetadata,
        *,
        storage_backend: StorageBackend,
        config: ResolverConfig,
        classifier: MimeClassifier,
        thumb_sizes: ThumbSizeRegistry,
        url_builder: ProxyUrlBuilder,
    ) -> None:
        self.metadata = metadata
        self.storage_backend = storage_backend
        self.config = config
        self.classifier = classifier
        self.thumb_sizes = thumb_sizes
        self.url_builder = url_builder

        self._thumb_variants: dict[str, ThumbVariant] = {}
        self._thumb_variants_ready = False

    @property
    def path(self) -> str:
        return self.metadata.path

    @property
    def type(self) -> str:
        return self.metadata.type.value

    def last_modified(self) -> int:
        return self.metadata.last_modified

    def icon_key(self) -> str:
        """Return the configured mime key of the blob (``dir`` for directories)."""
        return self.classifier.icon_key(self.metadata.mime_type, is_dir=self.metadata.is_dir)

    def media_type(self) -> MediaCategory:
        return self.classifier.classify(self.metadata.mime_type, is_dir=self.metadata.is_dir)

    def is_image(self) -> bool:
        return self.metadata.is_file and self.media_type() == MediaCategory.IMAGE

    def url(self, override_path: str | None = None) -> str:
        """Return the URL the blob (or ``override_path``) is served from.

        With public storage the backend's native URL is preferred, either as
        is or reduced to a root-relative path. Backends that cannot build URLs
        fall back to the proxy routes.
        """
        path = override_path or self.path

        if self.config.public_storage:
            try:
                native_url = self.storage_backend.url(path)
            except UrlNotSupportedError:
                logger.debug("native_url_unsupported", path=path)
            else:
                if self.config.absolute_url:
                    return native_url
                return "/" + urlparse(native_url).path.strip("\\/")

        if self.metadata.is_file:
            return self.url_builder.file(path)
        return self.url_builder.folder(path)

    def thumb_url(self, size_key: str = DEFAULT_THUMB_SIZE) -> str:
        """Return the thumbnail URL of the blob for ``size_key``.

        Directories get the directory icon, images their thumbnail variant
        (or the generic image icon for unknown size keys) and every other
        file the icon configured for its mime key.

        Raises:
            ConfigurationError: If no icon is configured for the needed key.

        """
        if not self.metadata.is_file:
            return self._icon_url(DIR_ICON_KEY)

        if self.is_image():
            variant = self.thumb_variants().get(size_key)
            if variant is None:
                return self._icon_url(IMAGE_ICON_KEY)
            return variant.url

        return self._icon_url(self.icon_key())

    def xs_thumb_url(self) -> str:
        return self.thumb_url(XS_THUMB_SIZE)

    def thumb_variants(self) -> dict[str, ThumbVariant]:
        """Return the thumbnail variants keyed by size, computing them once."""
        if not self._thumb_variants_ready:
            self._thumb_variants = self._build_thumb_variants()
            self._thumb_variants_ready = True
        return self._thumb_variants

    def _build_thumb_variants(self) -> dict[str, ThumbVariant]:
        if not self.is_image():
            return {}

        return {
            size_key: ThumbVariant(
                size_key=size_key,
                width=size.width,
                height=size.height,
                url=self.url(f"{size_key}/{self.path}"),
            )
            for size_key, size in self.thumb_sizes.sizes().items()
        }

    def _icon_url(self, key: str) -> str:
        url = self.config.icon_url(key)
        if url is None:
            raise ConfigurationError(key)
        return url


class BlobResolverFactory:
    """Create BlobResolvers from raw paths or directory listing entries.

    Holds the shared read-only collaborators; every call returns a fresh
    resolver that owns its own metadata and thumbnail cache.
    """

    def __init__(
        self,
        storage_backend: StorageBackend,
        config: ResolverConfig,
        normalizer: PathNormalizer,
        metadata_resolver: MetadataResolver,
        classifier: MimeClassifier,
        thumb_sizes: ThumbSizeRegistry,
        url_builder: ProxyUrlBuilder,
    ) -> None:
        self.storage_backend = storage_backend
        self.config = config
        self.normalizer = normalizer
        self.metadata_resolver = metadata_resolver
        self.classifier = classifier
        self.thumb_sizes = thumb_sizes
        self.url_builder = url_builder

    def resolve(self, target: str | ListingEntry) -> Result[BlobResolver, AppError]:
        """Resolve a raw path (direct mode) or a listing entry (batch mode).

        Args:
            target: Raw storage path, or an entry from ``StorageBackend.list``

        Returns:
            Result containing the resolver, or a ``not_found`` error

        """
        if isinstance(target, ListingEntry):
            entry = dataclasses.replace(target, path=self.normalizer.normalize(target.path))
            return Success(self._build(self.metadata_resolver.resolve_from_listing_entry(entry)))

        path = self.normalizer.normalize(target)
        return self.metadata_resolver.resolve_from_path(path).map(self._build)

    def _build(self, metadata: BlobMetadata) -> BlobResolver:
        return BlobResolver(
            metadata,
            storage_backend=self.storage_backend,
            config=self.config,
            classifier=self.classifier,
            thumb_sizes=self.thumb_sizes,
            url_builder=self.url_builder,
        )
