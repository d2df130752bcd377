# src/projctx/models.py
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from projctx.config import DEFAULT_MAX_DEPTH, DEFAULT_MAX_FILES
from projctx.core.patterns import PathPattern, coerce_patterns


@dataclass(frozen=True)
class FileNode:
    """A code file leaf of the scanned tree."""
    name: str
    rel_path: str
    extension: str


@dataclass(frozen=True)
class DirectoryNode:
    """A directory of the scanned tree. Children keep enumeration order."""
    name: str
    rel_path: str
    children: Tuple["TreeNode", ...] = ()
    # Absolute directory the tree was scanned from; only set on the root.
    origin: Optional[Path] = field(default=None, compare=False)

    def iter_files(self):
        """Yields every file leaf in pre-order."""
        for child in self.children:
            if isinstance(child, DirectoryNode):
                yield from child.iter_files()
            else:
                yield child


TreeNode = Union[DirectoryNode, FileNode]


@dataclass(frozen=True)
class SelectionPolicy:
    max_files: int = DEFAULT_MAX_FILES
    max_depth: int = DEFAULT_MAX_DEPTH
    include_patterns: Tuple[PathPattern, ...] = ()
    exclude_patterns: Tuple[PathPattern, ...] = ()

    def __post_init__(self):
        if self.max_files < 0:
            raise ValueError(f"max_files must be >= 0, got {self.max_files}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        # Accept plain strings and compiled regexes from callers.
        object.__setattr__(self, "include_patterns", coerce_patterns(self.include_patterns))
        object.__setattr__(self, "exclude_patterns", coerce_patterns(self.exclude_patterns))

    @classmethod
    def from_options(
        cls,
        max_files: Optional[int] = None,
        max_depth: Optional[int] = None,
        include_patterns: Optional[Iterable[Union[str, "re.Pattern", PathPattern]]] = None,
        exclude_patterns: Optional[Iterable[Union[str, "re.Pattern", PathPattern]]] = None,
    ) -> "SelectionPolicy":
        """Builds a policy from optional caller fields, filling in defaults."""
        return cls(
            max_files=DEFAULT_MAX_FILES if max_files is None else max_files,
            max_depth=DEFAULT_MAX_DEPTH if max_depth is None else max_depth,
            include_patterns=include_patterns or (),
            exclude_patterns=exclude_patterns or (),
        )

    def accepts(self, rel_path: str) -> bool:
        """Include check first, exclude always wins."""
        if self.include_patterns and not any(p.matches(rel_path) for p in self.include_patterns):
            return False
        return not any(p.matches(rel_path) for p in self.exclude_patterns)


@dataclass(frozen=True)
class FileContext:
    """Immutable data class holding a selected file and its content."""
    path: Path
    rel_path: str
    extension: str
    last_modified: datetime
    content: str


@dataclass(frozen=True)
class ProjectContext:
    structure: DirectoryNode
    files: Tuple[FileContext, ...]
