"""
Page graph loader.

Turns flat virtual file records into a folder/page/meta tree and runs an
ordered pipeline of transformers over the resulting context.
"""

from core.path_contract import InvalidPathError, PathDescriptor
from pagegraph.models import (
    FolderNode,
    GraphNode,
    Meta,
    MetaNode,
    Page,
    PageNode,
    ResultContext,
    VirtualFile,
)
from pagegraph.graph import (
    InternalInvariantError,
    build_graph,
    graph_to_dict,
    iter_folders,
    iter_leaves,
)
from pagegraph.loader import Transformer, load, resolve_files, run_transformers
from pagegraph.manifest import SourceManifest, load_source_manifest, parse_source_manifest
from pagegraph.transformers import (
    DEFAULT_TRANSFORMERS,
    collect_stats,
    index_pages,
    sort_pages_by_path,
)

__all__ = [
    # Data models
    "VirtualFile",
    "PathDescriptor",
    "Page",
    "Meta",
    "PageNode",
    "MetaNode",
    "FolderNode",
    "GraphNode",
    "ResultContext",
    # Errors
    "InvalidPathError",
    "InternalInvariantError",
    # Graph assembly
    "build_graph",
    "iter_leaves",
    "iter_folders",
    "graph_to_dict",
    # Orchestration
    "Transformer",
    "load",
    "resolve_files",
    "run_transformers",
    "DEFAULT_TRANSFORMERS",
    "index_pages",
    "sort_pages_by_path",
    "collect_stats",
    # Manifest
    "SourceManifest",
    "load_source_manifest",
    "parse_source_manifest",
]
