"""Tests for path canonicalization and sandboxing."""

from __future__ import annotations

import pytest

from domain.services.path_normalizer import (
    PathNormalizer,
    canonicalize,
    split_extension,
    split_path,
)

SAMPLE_PATHS = [
    "",
    "report.pdf",
    "/docs//a/b.txt/",
    "docs\\windows\\file.doc",
    "./docs/./x.png",
    "../../etc/passwd",
    "a/../../b",
    "users/42",
    "users/42/docs",
    "users/421/docs",
    "thumb",
    "thumb/photo.jpg",
    "thumb/users/42/photo.jpg",
    "xs/docs/cover.png",
    "thumbnails/a.jpg",
]


@pytest.fixture
def sandboxed() -> PathNormalizer:
    return PathNormalizer("users/42", size_keys=("thumb", "xs"))


class TestCanonicalize:
    """Test separator and segment cleanup."""

    def test_strips_redundant_separators(self) -> None:
        assert canonicalize("/a//b/c/") == "a/b/c"

    def test_converts_backslashes(self) -> None:
        assert canonicalize("a\\b\\c.txt") == "a/b/c.txt"

    def test_resolves_dot_segments(self) -> None:
        assert canonicalize("a/./b/../c") == "a/c"

    def test_never_climbs_above_start(self) -> None:
        assert canonicalize("../../etc/passwd") == "etc/passwd"
        assert canonicalize("a/../../b") == "b"

    def test_none_and_empty(self) -> None:
        assert canonicalize(None) == ""
        assert canonicalize("") == ""
        assert canonicalize("///") == ""


class TestSplitHelpers:
    """Test dir/name and name/extension splitting."""

    def test_split_path(self) -> None:
        assert split_path("a/b/c.txt") == ("a/b", "c.txt")
        assert split_path("c.txt") == ("", "c.txt")

    def test_split_extension_on_last_dot(self) -> None:
        assert split_extension("report.pdf") == ("report", "pdf")
        assert split_extension("archive.tar.gz") == ("archive.tar", "gz")

    def test_split_extension_without_extension(self) -> None:
        assert split_extension("README") == ("README", None)
        assert split_extension("name.") == ("name.", None)


class TestNormalize:
    """Test PathNormalizer.normalize."""

    def test_prefixes_sandbox_root(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.normalize("report.pdf") == "users/42/report.pdf"

    def test_empty_path_is_sandbox_root(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.normalize("") == "users/42"
        assert sandboxed.normalize(None) == "users/42"

    def test_already_sandboxed_path_unchanged(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.normalize("users/42/docs/a.txt") == "users/42/docs/a.txt"
        assert sandboxed.normalize("/users/42/") == "users/42"

    def test_root_match_respects_segment_boundary(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.normalize("users/421/a.txt") == "users/42/users/421/a.txt"

    def test_thumbnail_prefix_keeps_size_key_first(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.normalize("thumb/photo.jpg") == "thumb/users/42/photo.jpg"
        assert sandboxed.normalize("xs/docs/cover.png") == "xs/users/42/docs/cover.png"

    def test_sandboxed_thumbnail_path_unchanged(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.normalize("thumb/users/42/photo.jpg") == "thumb/users/42/photo.jpg"

    def test_bare_size_key(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.normalize("xs/") == "xs/users/42"

    def test_size_key_requires_separator(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.normalize("thumbnails/a.jpg") == "users/42/thumbnails/a.jpg"

    def test_traversal_stays_inside_sandbox(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.normalize("../../etc/passwd") == "users/42/etc/passwd"

    def test_empty_root_only_canonicalizes(self) -> None:
        normalizer = PathNormalizer("", size_keys=("thumb",))
        assert normalizer.normalize("/a//b/") == "a/b"
        assert normalizer.normalize("thumb/a.jpg") == "thumb/a.jpg"
        assert normalizer.normalize("") == ""

    def test_root_is_canonicalized(self) -> None:
        normalizer = PathNormalizer("/users//42/")
        assert normalizer.root == "users/42"
        assert normalizer.normalize("a.txt") == "users/42/a.txt"

    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_idempotent(self, sandboxed: PathNormalizer, path: str) -> None:
        once = sandboxed.normalize(path)
        assert sandboxed.normalize(once) == once

    @pytest.mark.parametrize(
        "path",
        [p for p in SAMPLE_PATHS if not p.startswith(("thumb/", "xs/")) and p != "thumb"],
    )
    def test_sandbox_containment(self, sandboxed: PathNormalizer, path: str) -> None:
        result = sandboxed.normalize(path)
        assert result == "users/42" or result.startswith("users/42/")

    @pytest.mark.parametrize("path", ["thumb/photo.jpg", "xs/docs/cover.png", "thumb/a/b/c.png"])
    def test_thumbnail_prefix_preservation(self, sandboxed: PathNormalizer, path: str) -> None:
        size_key = path.split("/", 1)[0]
        result = sandboxed.normalize(path)
        assert result.startswith(f"{size_key}/users/42/")


class TestStripRoot:
    """Test removal of the sandbox root for client presentation."""

    def test_strips_root(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.strip_root("users/42/docs/a.pdf") == "docs/a.pdf"
        assert sandboxed.strip_root("users/42") == ""

    def test_strips_root_after_size_key(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.strip_root("thumb/users/42/photo.jpg") == "thumb/photo.jpg"

    def test_leaves_foreign_paths(self, sandboxed: PathNormalizer) -> None:
        assert sandboxed.strip_root("other/x.txt") == "other/x.txt"
        assert sandboxed.strip_root("users/421/x.txt") == "users/421/x.txt"

    def test_round_trips_through_normalize(self, sandboxed: PathNormalizer) -> None:
        for path in ("users/42/docs/a.pdf", "thumb/users/42/photo.jpg", "users/42"):
            assert sandboxed.normalize(sandboxed.strip_root(path)) == path

    def test_parent(self) -> None:
        assert PathNormalizer.parent("docs/a") == "docs"
        assert PathNormalizer.parent("docs") == ""
