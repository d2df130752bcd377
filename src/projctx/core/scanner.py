# src/projctx/core/scanner.py
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from projctx.config import CODE_EXTENSIONS
from projctx.core.ignore import PruneRules
from projctx.errors import NotFoundError, ScanPermissionError
from projctx.models import DirectoryNode, FileNode, TreeNode

logger = logging.getLogger(__name__)


class ProjectScanner:
    def __init__(self, root_dir: Union[str, Path], extra_ignore: Optional[Iterable[str]] = None):
        self.root_dir = Path(root_dir)
        self.rules = PruneRules(extra_ignore)
        self.extensions = CODE_EXTENSIONS

    def scan(self) -> DirectoryNode:
        """
        Walks the directory tree, pruning ignored entries before descending,
        and returns the root DirectoryNode. Children keep the order the
        filesystem enumerates them in.
        """
        if not self.root_dir.exists():
            raise NotFoundError(self.root_dir, "Project root does not exist")
        if not self.root_dir.is_dir():
            raise NotFoundError(self.root_dir, "Project root is not a directory")

        origin = self.root_dir.resolve()
        logger.info("Scanning project directory: %s", origin)
        children = self._scan_dir(origin, "")
        root = DirectoryNode(name=origin.name, rel_path="", children=children, origin=origin)
        logger.info("Scan of %s finished", origin)
        return root

    def _scan_dir(self, dir_path: Path, rel_dir: str) -> tuple:
        try:
            with os.scandir(dir_path) as it:
                entries = list(it)
        except PermissionError as e:
            raise ScanPermissionError(dir_path, f"Cannot list directory ({e.strerror})") from e

        children: List[TreeNode] = []
        for entry in entries:
            rel_path = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
            # Symlinked directories are not followed.
            is_dir = entry.is_dir(follow_symlinks=False)

            # --- 1. Prune before recursion ---
            if self.rules.is_pruned(entry.name, rel_path, is_directory=is_dir):
                logger.debug("Pruning %s", rel_path)
                continue

            # --- 2. Directories ---
            if is_dir:
                sub_children = self._scan_dir(Path(entry.path), rel_path)
                children.append(DirectoryNode(name=entry.name, rel_path=rel_path, children=sub_children))
                continue

            # --- 3. Files: extension allow-list ---
            ext = os.path.splitext(entry.name)[1].lower()
            if ext not in self.extensions:
                continue
            children.append(FileNode(name=entry.name, rel_path=rel_path, extension=ext))

        return tuple(children)


def scan(root_path: Union[str, Path], extra_ignore: Optional[Iterable[str]] = None) -> DirectoryNode:
    """Scans root_path and returns its structural model."""
    return ProjectScanner(root_path, extra_ignore).scan()
