"""
Virtual files -> page graph -> transformers -> result context.
"""

from __future__ import annotations

import inspect
import logging
from typing import AbstractSet, Any, Awaitable, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from core.path_contract import normalize_path, parse_file_path
from core.structured_logging import stage_scope
from pagegraph.config import META_KIND, PAGE_KIND, ROOT_KEY
from pagegraph.graph import build_graph
from pagegraph.models import Meta, Page, ResultContext, VirtualFile

logger = logging.getLogger(__name__)

Transformer = Callable[[ResultContext], Union[Awaitable[Any], Any]]


def resolve_files(
    files: Iterable[VirtualFile],
    root_dir: str = "",
    languages: Optional[AbstractSet[str]] = None,
) -> Tuple[List[Page], List[Meta]]:
    """Resolve every file path and split the records by kind.

    Raises:
        InvalidPathError: On the first path that cannot be resolved.
    """
    pages: List[Page] = []
    metas: List[Meta] = []
    for source in files:
        descriptor = parse_file_path(source.path, root_dir, languages)
        if source.kind == PAGE_KIND:
            pages.append(Page.from_virtual_file(descriptor, source))
        elif source.kind == META_KIND:
            metas.append(Meta.from_virtual_file(descriptor, source))
    return pages, metas


def _transformer_name(transformer: Transformer) -> str:
    return getattr(transformer, "__qualname__", None) or repr(transformer)


async def run_transformers(
    ctx: ResultContext,
    transformers: Sequence[Transformer],
) -> ResultContext:
    """Run transformers one at a time, in order, against the shared context.

    Each transformer finishes (including any awaitable it returns) before
    the next one starts. Exceptions propagate unchanged.
    """
    for index, transformer in enumerate(transformers):
        name = _transformer_name(transformer)
        with stage_scope(f"transform:{name}"):
            logger.debug("Running transformer %d/%d: %s", index + 1, len(transformers), name)
            try:
                result = transformer(ctx)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.error("Transformer %s failed; aborting load", name)
                raise
    return ctx


async def load(
    files: Sequence[VirtualFile],
    transformers: Optional[Sequence[Transformer]] = None,
    root_dir: str = "",
    languages: Optional[AbstractSet[str]] = None,
) -> ResultContext:
    """Load virtual files into a ``ResultContext``.

    Args:
        files: Virtual files in caller order.
        transformers: Callables run sequentially against the context.
        root_dir: Directory the file paths are resolved against.
        languages: Locale codes parsed from leaf names; None disables it.

    Returns:
        The context after every transformer has completed.

    Raises:
        InvalidPathError: If any path falls outside ``root_dir``. No
            transformer runs in that case.
    """
    transformers = list(transformers or [])
    logger.info(
        "Loading %d virtual files (root=%r, %d transformers)",
        len(files),
        normalize_path(root_dir),
        len(transformers),
    )

    with stage_scope("resolve"):
        pages, metas = resolve_files(files, root_dir, languages)

    # Descriptors are root-relative, so the tree is always keyed at ROOT_KEY.
    with stage_scope("graph"):
        graph = build_graph(pages, metas, ROOT_KEY)

    ctx = ResultContext(graph=graph, pages=pages, metas=metas, data={})
    await run_transformers(ctx, transformers)

    logger.info("Loaded %d pages and %d metas", len(ctx.pages), len(ctx.metas))
    return ctx
