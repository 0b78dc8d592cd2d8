from __future__ import annotations

from lagom import Container

from application.ports.storage_backend import StorageBackend
from application.ports.thumb_size_registry import ThumbSizeRegistry
from application.services.blob_resolver import BlobResolverFactory
from application.services.metadata_resolver import MetadataResolver
from application.services.proxy_url_builder import ProxyUrlBuilder
from application.use_cases.blob_use_cases import GetBlobDetailsUseCase, ListFolderContentUseCase
from domain.services.mime_classifier import MimeClassifier
from domain.services.path_normalizer import PathNormalizer
from domain.value_objects.resolver_config import ResolverConfig
from infrastructure.config import Settings, load_resolver_config, load_tables, load_thumb_sizes
from infrastructure.config import settings as default_settings
from infrastructure.storage_backends.fsspec_storage_backend import FsspecStorageBackend
from infrastructure.thumbs.configured_thumb_size_registry import ConfiguredThumbSizeRegistry


def create_container(
    app_settings: Settings = default_settings,
    storage_backend: StorageBackend | None = None,
) -> Container:
    container = Container()

    # Read-only configuration, loaded once per process
    tables = load_tables(app_settings.filesys_config_file)
    resolver_config = load_resolver_config(app_settings, tables)
    container[ResolverConfig] = resolver_config
    container[ThumbSizeRegistry] = ConfiguredThumbSizeRegistry(
        load_thumb_sizes(app_settings, tables),
    )

    # Storage backend (fsspec)
    if storage_backend is None:
        storage_backend = FsspecStorageBackend(
            base_url=app_settings.storage_base_url,
            storage_options=app_settings.storage_options,
            public_base_url=app_settings.storage_public_base_url,
        )
    container[StorageBackend] = storage_backend

    # Domain services
    container[PathNormalizer] = PathNormalizer(
        resolver_config.user_folder,
        size_keys=container[ThumbSizeRegistry].keys(),
    )
    container[MimeClassifier] = MimeClassifier(
        mime_types=resolver_config.mime_types,
        mime_media=resolver_config.mime_media,
    )

    # Resolution services
    container[ProxyUrlBuilder] = lambda c: ProxyUrlBuilder(
        config=c[ResolverConfig],
        normalizer=c[PathNormalizer],
    )
    container[MetadataResolver] = lambda c: MetadataResolver(
        storage_backend=c[StorageBackend],
        config=c[ResolverConfig],
        normalizer=c[PathNormalizer],
    )
    container[BlobResolverFactory] = lambda c: BlobResolverFactory(
        storage_backend=c[StorageBackend],
        config=c[ResolverConfig],
        normalizer=c[PathNormalizer],
        metadata_resolver=c[MetadataResolver],
        classifier=c[MimeClassifier],
        thumb_sizes=c[ThumbSizeRegistry],
        url_builder=c[ProxyUrlBuilder],
    )

    # Register Use Cases
    container[GetBlobDetailsUseCase] = lambda c: GetBlobDetailsUseCase(
        blob_resolver_factory=c[BlobResolverFactory],
        metadata_resolver=c[MetadataResolver],
    )
    container[ListFolderContentUseCase] = lambda c: ListFolderContentUseCase(
        storage_backend=c[StorageBackend],
        blob_resolver_factory=c[BlobResolverFactory],
        metadata_resolver=c[MetadataResolver],
        normalizer=c[PathNormalizer],
        url_builder=c[ProxyUrlBuilder],
        config=c[ResolverConfig],
    )

    return container
