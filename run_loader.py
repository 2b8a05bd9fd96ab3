#!/usr/bin/env python3
"""
Command-line entry point for building a page graph from a source manifest.

Reads virtual file records from a YAML/JSON manifest, resolves them into a
page graph, runs the built-in transformers and writes the graph as JSON
together with a load report.

Usage:
    python run_loader.py --manifest docs/manifest.yml
    python run_loader.py --manifest docs/manifest.yml --root-dir docs
    python run_loader.py --manifest docs/manifest.json --output-file out/graph.json --strict-config
"""

import argparse
import asyncio
import logging
import os
import sys
import time
from typing import Any, Dict

from core.run_artifacts import write_json, write_load_report
from core.settings import LoaderSettings, load_settings, resolve_root_dir
from core.structured_logging import (
    collect_stage_timings,
    configure_structured_logging,
    set_load_id,
    stage_scope,
)
from pagegraph.graph import graph_to_dict
from pagegraph.loader import load
from pagegraph.manifest import load_source_manifest
from pagegraph.transformers import DEFAULT_TRANSFORMERS

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Virtual file -> page graph loader",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_loader.py --manifest docs/manifest.yml\n"
            "  python run_loader.py --manifest docs/manifest.yml --root-dir docs\n"
        ),
    )
    parser.add_argument(
        "--manifest",
        required=True,
        help="YAML or JSON file listing the virtual files to load.",
    )
    parser.add_argument(
        "--root-dir",
        default=None,
        help="Root directory for path resolution. Overrides the manifest and PAGEGRAPH_ROOT_DIR.",
    )
    parser.add_argument(
        "--output-file",
        default=None,
        help="Where to write the page graph JSON. Default: PAGEGRAPH_OUTPUT_FILE or output/page_graph.json",
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        help="Directory for load reports. Default: PAGEGRAPH_REPORT_DIR or output/load_reports",
    )
    parser.add_argument(
        "--language",
        dest="languages",
        action="append",
        default=[],
        help="Locale code parsed from leaf names (index.fr.mdx). Repeatable; adds to the manifest list.",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=False,
        help="Fail on malformed settings instead of falling back to defaults.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity. Default: INFO",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace, settings: LoaderSettings) -> Dict[str, Any]:
    """Load the manifest, build the graph and write it to disk.

    Returns:
        Report fields describing the load.
    """
    with stage_scope("manifest"):
        manifest = load_source_manifest(args.manifest)

    # Explicit roots fail loudly; only the env default may fall back.
    if args.root_dir is not None:
        root_dir = resolve_root_dir(args.root_dir, strict=True)
    elif manifest.root_dir is not None:
        root_dir = resolve_root_dir(manifest.root_dir, strict=True)
    else:
        root_dir = settings.root_dir
    output_file = args.output_file or settings.output_file
    languages = manifest.languages | frozenset(args.languages)

    logger.info("Manifest         : %s", os.path.abspath(args.manifest))
    logger.info("Root directory   : %r", root_dir)
    logger.info("Output file      : %s", os.path.abspath(output_file))
    logger.info("Languages        : %s", ", ".join(sorted(languages)) or "-")

    t0 = time.time()
    ctx = asyncio.run(load(manifest.files, list(DEFAULT_TRANSFORMERS), root_dir, languages))
    elapsed = time.time() - t0

    with stage_scope("write"):
        write_json(
            {
                "root_dir": root_dir,
                "graph": graph_to_dict(ctx.graph),
                "stats": ctx.data.get("stats", {}),
            },
            output_file,
        )

    logger.info("Page graph written to %s in %.2fs", output_file, elapsed)
    return {
        "manifest": args.manifest,
        "root_dir": root_dir,
        "output_file": output_file,
        "files": len(manifest.files),
        "languages": sorted(languages),
        "stats": ctx.data.get("stats", {}),
        "elapsed_seconds": round(elapsed, 3),
    }


def main(argv=None) -> None:
    """Main entry point for the loader CLI."""
    args = parse_args(argv)
    configure_structured_logging(level=getattr(logging, args.log_level))
    load_id = set_load_id()

    report: Dict[str, Any] = {"status": "running"}
    settings = LoaderSettings()
    with collect_stage_timings() as timings:
        try:
            settings = load_settings(strict=True if args.strict_config else None)
            report.update(run(args, settings))
            report["status"] = "success"
        except Exception as exc:
            report["status"] = "failed"
            report["error"] = f"{type(exc).__name__}: {exc}"
            logger.error("Load failed: %s", exc, exc_info=True)
    report["stage_timings"] = timings

    report_path = write_load_report(report, load_id, output_dir=args.report_dir or settings.report_dir)
    logger.info("Load report written: %s", report_path)
    if report["status"] == "failed":
        sys.exit(1)


if __name__ == "__main__":
    main()
