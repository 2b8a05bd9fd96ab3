"""Core shared contracts and utilities."""

from core.path_contract import (
    PATH_SEPARATOR,
    InvalidPathError,
    PathDescriptor,
    join_path,
    normalize_path,
    parse_file_path,
    split_path,
    strip_root,
)
from core.structured_logging import (
    collect_stage_timings,
    configure_structured_logging,
    get_load_id,
    get_stage,
    set_load_id,
    stage_scope,
)
from core.settings import (
    ConfigValidationError,
    LoaderSettings,
    load_settings,
    resolve_root_dir,
    resolve_strict_config_validation,
)
from core.run_artifacts import write_json, write_load_report

__all__ = [
    "PATH_SEPARATOR",
    "InvalidPathError",
    "PathDescriptor",
    "join_path",
    "normalize_path",
    "parse_file_path",
    "split_path",
    "strip_root",
    "collect_stage_timings",
    "configure_structured_logging",
    "get_load_id",
    "get_stage",
    "set_load_id",
    "stage_scope",
    "ConfigValidationError",
    "LoaderSettings",
    "load_settings",
    "resolve_root_dir",
    "resolve_strict_config_validation",
    "write_json",
    "write_load_report",
]
