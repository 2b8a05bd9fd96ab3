"""Logical path contract shared by the loader and the graph builder."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import AbstractSet, Any, Optional

PATH_SEPARATOR = "/"

_BACKSLASH_RE = re.compile(r"\\+")


class InvalidPathError(ValueError):
    """Raised when a virtual file path cannot be resolved against the root."""


@dataclass(frozen=True)
class PathDescriptor:
    """Structured form of a root-relative virtual file path.

    Attributes:
        path: Normalized path relative to the configured root directory.
        dirname: All segments except the last, joined by ``/``.
        name: Leaf segment without extension and locale marker.
        flattened_path: ``dirname/name`` keeping the locale marker.
        locale: Locale marker parsed from the leaf (``index.fr.mdx``), or None.
    """

    path: str
    dirname: str
    name: str
    flattened_path: str
    locale: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty segments.

    Leading, trailing and repeated separators never yield empty segments,
    so ``"/a//b/"`` and ``"a/b"`` both give ``["a", "b"]``.
    """
    normalized = _BACKSLASH_RE.sub(PATH_SEPARATOR, path)
    return [segment for segment in normalized.split(PATH_SEPARATOR) if segment]


def join_path(*parts: str) -> str:
    """Join path fragments, dropping empty ones."""
    segments: list[str] = []
    for part in parts:
        segments.extend(split_path(part))
    return PATH_SEPARATOR.join(segments)


def normalize_path(path: str) -> str:
    """Canonical ``/``-joined form of ``path`` with ``.`` segments removed.

    Raises:
        InvalidPathError: If the path climbs out of its root with ``..``.
    """
    segments = [segment for segment in split_path(path) if segment != "."]
    if ".." in segments:
        raise InvalidPathError(f"Parent directory references are not allowed: {path!r}")
    return PATH_SEPARATOR.join(segments)


def strip_root(path: str, root_dir: str) -> list[str]:
    """Return the segments of ``path`` below ``root_dir``.

    The root must be a segment-wise prefix: ``docs`` is a prefix of
    ``docs/a.mdx`` but not of ``docs-old/a.mdx``.
    """
    segments = split_path(normalize_path(path))
    root_segments = split_path(normalize_path(root_dir))
    if segments[: len(root_segments)] != root_segments:
        raise InvalidPathError(
            f"Path {path!r} is not inside root directory {root_dir!r}"
        )
    return segments[len(root_segments):]


def _split_leaf(
    leaf: str,
    languages: AbstractSet[str],
) -> tuple[str, str, Optional[str]]:
    """Split a leaf segment into (name, name_with_locale, locale).

    Only suffixes listed in ``languages`` count as locale markers, so
    ``setup.old.md`` keeps the name ``setup.old``.
    """
    dot_idx = leaf.rfind(".")
    stem = leaf[:dot_idx] if dot_idx > 0 else leaf

    locale_idx = stem.rfind(".")
    if locale_idx > 0:
        candidate = stem[locale_idx + 1:]
        if candidate in languages:
            return stem[:locale_idx], stem, candidate
    return stem, stem, None


def parse_file_path(
    raw_path: str,
    root_dir: str = "",
    languages: Optional[AbstractSet[str]] = None,
) -> PathDescriptor:
    """Resolve a raw virtual file path into a ``PathDescriptor``.

    Args:
        raw_path: Logical path as supplied by the caller.
        root_dir: Base directory the path is resolved against. Empty means
            the logical root.
        languages: Locale codes recognized as a leaf suffix
            (``index.fr.mdx``). Empty or None disables locale parsing.

    Returns:
        PathDescriptor relative to ``root_dir``.

    Raises:
        InvalidPathError: If ``root_dir`` is not a structural prefix of
            ``raw_path`` or no leaf segment remains after stripping it.
    """
    segments = strip_root(raw_path, root_dir)
    if not segments:
        raise InvalidPathError(
            f"Path {raw_path!r} has no file segment below root {root_dir!r}"
        )

    dirname = PATH_SEPARATOR.join(segments[:-1])
    name, name_with_locale, locale = _split_leaf(segments[-1], frozenset(languages or ()))
    return PathDescriptor(
        path=PATH_SEPARATOR.join(segments),
        dirname=dirname,
        name=name,
        flattened_path=join_path(dirname, name_with_locale),
        locale=locale,
    )
