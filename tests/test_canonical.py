"""Tests for dingo.routing.canonical — path canonicalization."""

import pytest

from dingo.routing.canonical import canonicalize

SAMPLE_PATHS = [
    "",
    "/",
    ".",
    "..",
    "blog",
    "/blog",
    "/blog/",
    "//blog//posts",
    "/a/./b/../c",
    "/../../etc/passwd",
    "/trailing//",
    "relative/../path/",
    "/with space/ünïcode",
    "/\x00/\xff",
]


class TestCanonicalPaths:
    @pytest.mark.parametrize("path", ["/", "/some/path/", "/users/alice/", "/a/b/c/"])
    def test_canonical_path_unchanged(self, path: str) -> None:
        assert canonicalize(path) == (path, True)


class TestNonCanonicalPaths:
    def test_empty_path(self) -> None:
        assert canonicalize("") == ("/", False)

    def test_missing_trailing_slash(self) -> None:
        assert canonicalize("/some/path") == ("/some/path/", False)

    def test_missing_leading_slash(self) -> None:
        assert canonicalize("blog/") == ("/blog/", False)

    def test_dot_segments_removed(self) -> None:
        assert canonicalize("/a/./b/../c") == ("/a/c/", False)

    def test_duplicate_separators_collapsed(self) -> None:
        assert canonicalize("/a//b///c/") == ("/a/b/c/", False)

    def test_leading_double_slash_collapsed(self) -> None:
        assert canonicalize("//blog//posts") == ("/blog/posts/", False)

    def test_traversal_cannot_escape_root(self) -> None:
        assert canonicalize("/../../etc/passwd") == ("/etc/passwd/", False)

    def test_parent_of_root(self) -> None:
        assert canonicalize("/..") == ("/", False)


class TestProperties:
    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_total(self, path: str) -> None:
        cleaned, was_canonical = canonicalize(path)
        assert isinstance(cleaned, str)
        assert isinstance(was_canonical, bool)

    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_idempotent(self, path: str) -> None:
        cleaned, _ = canonicalize(path)
        assert canonicalize(cleaned) == (cleaned, True)

    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_result_shape(self, path: str) -> None:
        cleaned, _ = canonicalize(path)
        assert cleaned.startswith("/")
        assert cleaned.endswith("/")
        assert "//" not in cleaned

    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_flag_means_unchanged(self, path: str) -> None:
        cleaned, was_canonical = canonicalize(path)
        assert was_canonical == (cleaned == path)
