"""Runtime settings for the page graph loader.

Values come from the process environment, optionally seeded from a
``.env`` file via python-dotenv. Strict mode turns malformed values into
``ConfigValidationError``; otherwise a warning is logged and the default
is used.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from core.path_contract import InvalidPathError, normalize_path

logger = logging.getLogger(__name__)

DEFAULT_ROOT_DIR: str = ""
DEFAULT_OUTPUT_FILE: str = "output/page_graph.json"
DEFAULT_REPORT_DIR: str = "output/load_reports"


class ConfigValidationError(RuntimeError):
    """Raised when strict settings validation fails."""


@dataclass(frozen=True)
class LoaderSettings:
    """Resolved loader settings."""

    root_dir: str = DEFAULT_ROOT_DIR
    output_file: str = DEFAULT_OUTPUT_FILE
    report_dir: str = DEFAULT_REPORT_DIR
    strict: bool = False


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def resolve_root_dir(raw: str | None, strict: bool = False) -> str:
    """Normalize a configured root directory.

    An unusable value (e.g. one containing ``..``) falls back to the
    logical root unless ``strict`` is set.
    """
    if raw is None:
        return DEFAULT_ROOT_DIR
    try:
        return normalize_path(raw)
    except InvalidPathError as exc:
        msg = f"Invalid root directory {raw!r}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; using logical root", msg)
        return DEFAULT_ROOT_DIR


def load_settings(env_file: str | None = None, strict: bool | None = None) -> LoaderSettings:
    """Build ``LoaderSettings`` from the environment.

    Args:
        env_file: Optional ``.env`` path; when omitted python-dotenv searches
            the working directory. Existing environment variables win.
        strict: Override for ``STRICT_CONFIG_VALIDATION``.
    """
    load_dotenv(dotenv_path=env_file, override=False)
    strict_mode = resolve_strict_config_validation() if strict is None else strict

    settings = LoaderSettings(
        root_dir=resolve_root_dir(os.getenv("PAGEGRAPH_ROOT_DIR"), strict=strict_mode),
        output_file=os.getenv("PAGEGRAPH_OUTPUT_FILE", DEFAULT_OUTPUT_FILE).strip()
        or DEFAULT_OUTPUT_FILE,
        report_dir=os.getenv("PAGEGRAPH_REPORT_DIR", DEFAULT_REPORT_DIR).strip()
        or DEFAULT_REPORT_DIR,
        strict=strict_mode,
    )
    logger.debug("Resolved loader settings: %s", settings)
    return settings
