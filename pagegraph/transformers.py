"""Built-in transformers for the loader pipeline."""

from __future__ import annotations

import logging

from pagegraph.config import PAGES_BY_PATH_KEY, STATS_KEY
from pagegraph.graph import iter_folders
from pagegraph.models import ResultContext

logger = logging.getLogger(__name__)


async def index_pages(ctx: ResultContext) -> None:
    """Store a flattened path -> page lookup under ``pages_by_path``.

    With duplicate flattened paths the first page wins.
    """
    index = {}
    for page in ctx.pages:
        key = page.file.flattened_path
        if key in index:
            logger.warning("Duplicate page path %s; keeping the first one", key)
            continue
        index[key] = page
    ctx.data[PAGES_BY_PATH_KEY] = index


async def sort_pages_by_path(ctx: ResultContext) -> None:
    """Reorder ``ctx.pages`` by flattened path. The graph is left untouched."""
    ctx.pages.sort(key=lambda page: page.file.flattened_path)


async def collect_stats(ctx: ResultContext) -> None:
    """Store page, meta and folder counts under ``stats``."""
    ctx.data[STATS_KEY] = {
        "pages": len(ctx.pages),
        "metas": len(ctx.metas),
        "folders": sum(1 for _ in iter_folders(ctx.graph)),
    }


DEFAULT_TRANSFORMERS = (index_pages, collect_stats)
