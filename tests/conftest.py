"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from domain.services.path_normalizer import PathNormalizer
from domain.value_objects.resolver_config import ResolverConfig
from tests.mocks import MockStorageBackend, StaticThumbSizeRegistry, make_resolver_config


@pytest.fixture
def resolver_config() -> ResolverConfig:
    """Return a resolver configuration sandboxed to ``users/42``."""
    return make_resolver_config()


@pytest.fixture
def thumb_sizes() -> StaticThumbSizeRegistry:
    """Return the ``thumb`` (200x200) and ``xs`` (30x30) thumbnail sizes."""
    return StaticThumbSizeRegistry()


@pytest.fixture
def normalizer(resolver_config: ResolverConfig, thumb_sizes: StaticThumbSizeRegistry) -> PathNormalizer:
    return PathNormalizer(resolver_config.user_folder, size_keys=thumb_sizes.keys())


@pytest.fixture
def storage_backend() -> MockStorageBackend:
    """Create a backend holding a small sandboxed tree for user 42."""
    backend = MockStorageBackend()
    backend.add_file("users/42/report.pdf", size=2048, last_modified=1_700_000_000)
    backend.add_file("users/42/photo.jpg", size=4096, last_modified=1_700_000_100)
    backend.add_file("users/42/notes.xyz", size=12, last_modified=1_700_000_200)
    backend.add_file("users/42/docs/song.mp3", size=8192, last_modified=1_700_000_300)
    backend.add_file("users/42/docs/cover.png", size=512, last_modified=1_700_000_400)
    backend.add_dir("users/42/docs/archive")
    backend.calls.clear()
    return backend
