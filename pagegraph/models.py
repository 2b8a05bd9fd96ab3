"""
Data models for virtual files, resolved records and the page graph.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional, Union

from core.path_contract import PathDescriptor
from pagegraph.config import FILE_KINDS, FOLDER_NODE, META_NODE, PAGE_NODE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VirtualFile:
    """In-memory stand-in for a content source.

    Attributes:
        path: Logical path, e.g. ``docs/guides/index.mdx``.
        kind: ``page`` or ``meta``.
        data: Free-form fields merged into the resolved record.
    """

    path: str
    kind: str
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.kind not in FILE_KINDS:
            raise ValueError(
                f"Unknown virtual file kind {self.kind!r} for {self.path!r}. "
                f"Expected one of: {sorted(FILE_KINDS)}"
            )
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))


def _without_file_key(data: Mapping[str, Any], path: str) -> dict[str, Any]:
    # Records own their data; nested values are never shared with the input.
    fields = copy.deepcopy(dict(data))
    if "file" in fields:
        logger.debug("Ignoring 'file' key in data for %s; the path descriptor wins", path)
        del fields["file"]
    return fields


@dataclass
class _Record:
    file: PathDescriptor
    data: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        if key == "file":
            return self.file
        return self.data[key]

    def get(self, key: str, default: Any = None) -> Any:
        if key == "file":
            return self.file
        return self.data.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Shallow union of the caller fields and the path descriptor."""
        return {**self.data, "file": self.file.to_dict()}

    @classmethod
    def from_virtual_file(cls, file: PathDescriptor, source: VirtualFile):
        return cls(file=file, data=_without_file_key(source.data, source.path))


@dataclass
class Page(_Record):
    """A resolved page record."""


@dataclass
class Meta(_Record):
    """A resolved meta record (folder metadata such as ordering or title)."""


@dataclass
class PageNode:
    page: Page
    type: Literal["page"] = field(default=PAGE_NODE, init=False)


@dataclass
class MetaNode:
    meta: Meta
    type: Literal["meta"] = field(default=META_NODE, init=False)


@dataclass
class FolderNode:
    """A directory in the page graph; children keep insertion order."""

    children: list[GraphNode] = field(default_factory=list)
    type: Literal["folder"] = field(default=FOLDER_NODE, init=False)


GraphNode = Union[PageNode, MetaNode, FolderNode]


@dataclass
class ResultContext:
    """Outcome of a load, shared by reference with every transformer.

    ``data`` starts empty and is the channel transformers use to hand
    computed artifacts to the caller and to later transformers.
    """

    graph: FolderNode
    pages: list[Page]
    metas: list[Meta]
    data: dict[str, Any] = field(default_factory=dict)

    def find_page(self, flattened_path: str) -> Optional[Page]:
        for page in self.pages:
            if page.file.flattened_path == flattened_path:
                return page
        return None
