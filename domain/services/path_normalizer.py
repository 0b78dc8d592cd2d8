"""Canonicalization and sandboxing of storage paths."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

SEPARATOR = "/"


def canonicalize(path: str | None) -> str:
    """Return ``path`` with unified separators and no redundant segments.

    Backslashes become slashes, empty and ``.`` segments are dropped and a
    ``..`` segment removes its predecessor. A ``..`` with nothing left to
    remove is discarded, so the result never climbs above its start.
    """
    segments: list[str] = []
    for segment in (path or "").replace("\\", SEPARATOR).split(SEPARATOR):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    return SEPARATOR.join(segments)


def split_path(path: str) -> tuple[str, str]:
    """Split a canonical path into ``(dir, name)`` on the last separator."""
    dir_, _, name = canonicalize(path).rpartition(SEPARATOR)
    return dir_, name


def split_extension(name: str) -> tuple[str, str | None]:
    """Split a file name into ``(name, extension)`` on the last dot."""
    stem, dot, extension = name.rpartition(".")
    if not dot or not extension:
        return name, None
    return stem, extension


class PathNormalizer:
    """Confine raw storage paths to the configured sandbox root.

    Thumbnail URLs and blob paths share one namespace (``thumb/a.jpg`` next to
    ``a.jpg``), so for paths starting with a thumbnail size key the root is
    inserted after the size-key segment rather than before it.
    """

    def __init__(self, user_folder: str = "", size_keys: Iterable[str] = ()) -> None:
        self.root = canonicalize(user_folder)
        self.size_keys = tuple(size_keys)

    def normalize(self, raw_path: str | None = "") -> str:
        """Return the canonical, sandboxed form of ``raw_path``.

        Idempotent: normalizing an already normalized path returns it as is.
        """
        path = canonicalize(raw_path)

        if not self.root or self.is_rooted(path):
            return path

        size_key = self.thumb_size_key(path)
        if size_key is not None:
            relative = canonicalize(path[len(size_key) :])
            if not self.is_rooted(relative):
                relative = f"{self.root}{SEPARATOR}{relative}"
            return canonicalize(f"{size_key}{SEPARATOR}{relative}")

        return canonicalize(f"{self.root}{SEPARATOR}{path}")

    def is_rooted(self, path: str) -> bool:
        """Check if a canonical path already lives under the sandbox root."""
        if not self.root:
            return True
        return path == self.root or path.startswith(self.root + SEPARATOR)

    def thumb_size_key(self, path: str) -> str | None:
        """Return the size key ``path`` starts with, if any.

        A size key only matches a whole leading segment: ``thumbnails/a.jpg``
        is not a ``thumb`` path.
        """
        first_segment = canonicalize(path).split(SEPARATOR, 1)[0]
        for size_key in self.size_keys:
            if first_segment == size_key:
                return size_key
        return None

    def strip_root(self, path: str) -> str:
        """Remove the sandbox root prefix, for presentation to clients.

        For thumbnail paths the root is removed after the size-key segment.
        """
        path = canonicalize(path)
        if not self.root:
            return path
        if self.is_rooted(path):
            return canonicalize(path[len(self.root) :])

        size_key = self.thumb_size_key(path)
        if size_key is not None:
            relative = canonicalize(path[len(size_key) :])
            if self.is_rooted(relative):
                return canonicalize(f"{size_key}{SEPARATOR}{relative[len(self.root) :]}")
        return path

    @staticmethod
    def parent(path: str) -> str:
        """Return the canonical parent directory of ``path``."""
        return split_path(path)[0]
