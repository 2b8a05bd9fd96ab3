"""
Page graph assembly.

Groups resolved pages and metas by directory and links one folder node per
directory under its nearest registered ancestor. Folders live in a flat
directory -> node registry while building, so nodes never point back to
their parents.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Sequence, Union

from core.path_contract import PATH_SEPARATOR, InvalidPathError, normalize_path, split_path
from pagegraph.config import ROOT_KEY
from pagegraph.models import FolderNode, GraphNode, Meta, MetaNode, Page, PageNode

logger = logging.getLogger(__name__)

LeafNode = Union[PageNode, MetaNode]


class InternalInvariantError(RuntimeError):
    """Raised when graph construction leaves the tree in an impossible state."""


def group_by_directory(
    pages: Sequence[Page],
    metas: Sequence[Meta],
) -> Dict[str, List[LeafNode]]:
    """Map each dirname to its leaf nodes, all pages first, then all metas."""
    directories: Dict[str, List[LeafNode]] = {}
    for page in pages:
        directories.setdefault(page.file.dirname, []).append(PageNode(page=page))
    for meta in metas:
        directories.setdefault(meta.file.dirname, []).append(MetaNode(meta=meta))
    return directories


def order_by_depth(keys: Sequence[str]) -> List[str]:
    """Order directory keys shallowest first.

    Depth is the segment count. The sort is stable, so directories at the
    same depth keep first-seen order.
    """
    return sorted(keys, key=lambda key: len(split_path(key)))


def _find_ancestor(key: str, folders: Dict[str, FolderNode]) -> FolderNode | None:
    segments = split_path(key)
    for i in range(len(segments), -1, -1):
        node = folders.get(PATH_SEPARATOR.join(segments[:i]))
        if node is not None:
            return node
    return None


def build_graph(
    pages: Sequence[Page],
    metas: Sequence[Meta],
    root_dir: str = ROOT_KEY,
) -> FolderNode:
    """Assemble the page graph rooted at ``root_dir``.

    Args:
        pages: Resolved pages in input order.
        metas: Resolved metas in input order.
        root_dir: Directory key of the tree root, in the same coordinate
            space as the records' ``dirname`` (the logical root is ``""``).

    Returns:
        Folder node for ``root_dir``.

    Raises:
        InvalidPathError: If a directory has no ancestor under ``root_dir``.
        InternalInvariantError: If no folder was registered for ``root_dir``.
    """
    root_key = normalize_path(root_dir)
    directories = group_by_directory(pages, metas)
    directories.setdefault(root_key, [])

    folders: Dict[str, FolderNode] = {}
    for key in order_by_depth(list(directories)):
        parent = _find_ancestor(key, folders)
        if parent is None and key != root_key:
            raise InvalidPathError(
                f"Directory {key!r} is outside graph root {root_key!r}"
            )

        node = FolderNode(children=directories[key])
        folders[key] = node
        if parent is not None:
            parent.children.append(node)

    root = folders.get(root_key)
    if root is None:
        raise InternalInvariantError(f"No folder registered for graph root {root_key!r}")

    logger.debug(
        "Built page graph: %d folders, %d pages, %d metas",
        len(folders),
        len(pages),
        len(metas),
    )
    return root


def iter_leaves(node: GraphNode) -> Iterator[Union[PageNode, MetaNode]]:
    """Yield page and meta nodes depth-first, in child order."""
    if isinstance(node, FolderNode):
        for child in node.children:
            yield from iter_leaves(child)
    else:
        yield node


def iter_folders(node: GraphNode) -> Iterator[FolderNode]:
    """Yield folder nodes depth-first, starting with ``node`` itself."""
    if isinstance(node, FolderNode):
        yield node
        for child in node.children:
            yield from iter_folders(child)


def graph_to_dict(node: GraphNode) -> Dict[str, Any]:
    """Convert a graph node to a JSON-serializable dict."""
    if isinstance(node, FolderNode):
        return {
            "type": node.type,
            "children": [graph_to_dict(child) for child in node.children],
        }
    if isinstance(node, PageNode):
        return {"type": node.type, "page": node.page.to_dict()}
    return {"type": node.type, "meta": node.meta.to_dict()}
