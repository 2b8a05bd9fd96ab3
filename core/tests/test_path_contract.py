"""Tests for path segmentation and virtual file path resolution."""

import pytest

from core.path_contract import (
    InvalidPathError,
    join_path,
    normalize_path,
    parse_file_path,
    split_path,
)


def test_split_path_drops_empty_segments() -> None:
    assert split_path("/a//b/") == ["a", "b"]
    assert split_path("a/b/c.mdx") == ["a", "b", "c.mdx"]


def test_split_path_empty_input() -> None:
    assert split_path("") == []
    assert split_path("///") == []


def test_split_path_normalizes_backslashes() -> None:
    assert split_path("guides\\auth\\index.mdx") == ["guides", "auth", "index.mdx"]


def test_join_path_skips_empty_parts() -> None:
    assert join_path("", "index") == "index"
    assert join_path("guides/", "/auth") == "guides/auth"


def test_normalize_path_removes_dot_segments() -> None:
    assert normalize_path("./docs/./guides/") == "docs/guides"


def test_normalize_path_rejects_parent_references() -> None:
    with pytest.raises(InvalidPathError):
        normalize_path("docs/../secret.mdx")


def test_parse_root_level_file() -> None:
    info = parse_file_path("index.mdx")
    assert info.dirname == ""
    assert info.name == "index"
    assert info.path == "index.mdx"
    assert info.flattened_path == "index"
    assert info.locale is None


def test_parse_nested_file() -> None:
    info = parse_file_path("/guides//auth/setup.md")
    assert info.dirname == "guides/auth"
    assert info.name == "setup"
    assert info.path == "guides/auth/setup.md"
    assert info.flattened_path == "guides/auth/setup"


def test_parse_strips_root_dir() -> None:
    info = parse_file_path("docs/guides/meta.json", "docs")
    assert info.dirname == "guides"
    assert info.name == "meta"
    assert info.path == "guides/meta.json"


def test_parse_root_dir_with_trailing_separator() -> None:
    info = parse_file_path("docs/index.mdx", "/docs/")
    assert info.dirname == ""
    assert info.name == "index"


def test_parse_locale_marker() -> None:
    info = parse_file_path("guides/index.fr.mdx", languages={"en", "fr"})
    assert info.name == "index"
    assert info.locale == "fr"
    assert info.flattened_path == "guides/index.fr"


def test_parse_keeps_non_locale_dots_in_name() -> None:
    info = parse_file_path("changelog/v1.2.md")
    assert info.name == "v1.2"
    assert info.locale is None


@pytest.mark.parametrize(
    "leaf, name",
    [
        ("setup.old.md", "setup.old"),
        ("api.get.mdx", "api.get"),
        ("config.dev.mdx", "config.dev"),
        ("guide.new.mdx", "guide.new"),
    ],
)
def test_short_dotted_suffix_is_part_of_name(leaf: str, name: str) -> None:
    info = parse_file_path(f"guides/{leaf}", languages={"en", "fr", "de"})
    assert info.name == name
    assert info.locale is None
    assert info.flattened_path == f"guides/{name}"


def test_locale_parsing_disabled_without_languages() -> None:
    info = parse_file_path("index.fr.mdx")
    assert info.name == "index.fr"
    assert info.locale is None


def test_parse_file_without_extension() -> None:
    info = parse_file_path("guides/README")
    assert info.name == "README"
    assert info.flattened_path == "guides/README"


def test_root_dir_not_a_prefix_raises() -> None:
    with pytest.raises(InvalidPathError):
        parse_file_path("guide.mdx", "docs")


def test_root_dir_must_match_whole_segments() -> None:
    with pytest.raises(InvalidPathError):
        parse_file_path("docs-old/guide.mdx", "docs")


def test_path_equal_to_root_raises() -> None:
    with pytest.raises(InvalidPathError):
        parse_file_path("docs/", "docs")


def test_invalid_path_error_is_value_error() -> None:
    assert issubclass(InvalidPathError, ValueError)
