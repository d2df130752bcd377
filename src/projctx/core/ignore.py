# src/projctx/core/ignore.py
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import pathspec

from projctx.config import DEFAULT_PRUNE_PATTERNS

logger = logging.getLogger(__name__)


class PruneRules:
    """
    Decides which directory entries the scanner skips.

    The built-in rules are matched against the bare entry name, so they apply
    at every level of the tree. Extra rules are gitignore-style patterns
    matched against the entry's path relative to the scan root.
    """

    def __init__(self, extra_patterns: Optional[Iterable[str]] = None):
        self.builtin_spec = pathspec.PathSpec.from_lines("gitwildmatch", DEFAULT_PRUNE_PATTERNS)
        self.extra_spec: Optional[pathspec.PathSpec] = None
        extra = [p for p in (extra_patterns or []) if p.strip()]
        if extra:
            self.extra_spec = pathspec.PathSpec.from_lines("gitwildmatch", extra)

    def is_pruned(self, name: str, rel_path: str, is_directory: bool) -> bool:
        if self.builtin_spec.match_file(name):
            return True
        if self.extra_spec is None:
            return False
        # A trailing slash lets "venv/" style rules match directories only.
        candidate = f"{rel_path}/" if is_directory else rel_path
        return self.extra_spec.match_file(candidate)


def load_ignore_patterns(ignore_file: Path) -> List[str]:
    """
    Reads gitignore-style lines from an ignore file.
    A missing file yields no patterns.
    """
    if not ignore_file.is_file():
        return []
    with open(ignore_file, "r", encoding="utf-8") as f:
        lines = f.read().splitlines()
    logger.debug("Loaded %d ignore lines from %s", len(lines), ignore_file)
    return lines
