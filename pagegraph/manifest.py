"""Source manifest: a YAML/JSON listing of virtual files for the CLI."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from pagegraph.config import FILE_KINDS
from pagegraph.models import VirtualFile


@dataclass(frozen=True)
class SourceManifest:
    """Top-level manifest payload."""

    files: list[VirtualFile]
    root_dir: Optional[str] = None
    languages: frozenset[str] = frozenset()


def _expect_dict(payload: Any, ctx: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValueError(f"{ctx} must be an object")
    return payload


def _load_manifest_payload(path: str) -> dict[str, Any]:
    manifest_path = Path(path)
    if not manifest_path.is_file():
        raise FileNotFoundError(f"Manifest file not found: {manifest_path}")

    text = manifest_path.read_text(encoding="utf-8")
    if manifest_path.suffix.lower() == ".json":
        payload = json.loads(text)
    else:
        payload = yaml.safe_load(text)
    return _expect_dict(payload, "manifest")


def _parse_file_entry(index: int, raw: Any) -> VirtualFile:
    entry = _expect_dict(raw, f"files[{index}]")
    path = str(entry.get("path", "")).strip()
    kind = str(entry.get("kind", "")).strip()

    if not path:
        raise ValueError(f"files[{index}]: path is required")
    if kind not in FILE_KINDS:
        raise ValueError(
            f"files[{index}] ({path}): kind must be one of {sorted(FILE_KINDS)}"
        )

    data = entry.get("data")
    data = _expect_dict(data, f"files[{index}].data") if data is not None else {}
    return VirtualFile(path=path, kind=kind, data=data)


def parse_source_manifest(payload: dict[str, Any]) -> SourceManifest:
    """Validate an already-decoded manifest payload."""
    files_raw = payload.get("files")
    if not isinstance(files_raw, list):
        raise ValueError("files must be a list")

    files = [_parse_file_entry(i, raw) for i, raw in enumerate(files_raw)]
    root_dir = payload.get("root_dir")

    languages_raw = payload.get("languages", [])
    if not isinstance(languages_raw, list):
        raise ValueError("languages must be a list")
    languages = frozenset(str(code).strip() for code in languages_raw if str(code).strip())

    return SourceManifest(
        files=files,
        root_dir=str(root_dir) if root_dir is not None else None,
        languages=languages,
    )


def load_source_manifest(path: str) -> SourceManifest:
    """Load and validate a source manifest from a YAML or JSON file."""
    return parse_source_manifest(_load_manifest_payload(path))
