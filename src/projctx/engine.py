# src/projctx/engine.py
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from projctx.core.assembler import ContextAssembler
from projctx.core.cache import ContentCache
from projctx.core.scanner import ProjectScanner
from projctx.errors import NotScannedError
from projctx.models import DirectoryNode, ProjectContext, SelectionPolicy

logger = logging.getLogger(__name__)


class ContextEngine:
    """
    Keeps one scanned tree per project root and a content cache shared by
    every assemble call. A root is scanned once until it is invalidated.
    """

    def __init__(self, cache: Optional[ContentCache] = None, extra_ignore: Optional[Iterable[str]] = None):
        self.cache = cache if cache is not None else ContentCache()
        self.extra_ignore = list(extra_ignore or [])
        self.assembler = ContextAssembler(self.cache)
        self._trees: Dict[Path, DirectoryNode] = {}
        self._last_root: Optional[Path] = None

    @staticmethod
    def _resolve(root: Union[str, Path, None]) -> Path:
        return Path(root if root is not None else os.getcwd()).resolve()

    def scan_project(self, root: Union[str, Path, None] = None) -> DirectoryNode:
        key = self._resolve(root)
        tree = self._trees.get(key)
        if tree is None:
            tree = ProjectScanner(key, self.extra_ignore).scan()
            self._trees[key] = tree
        else:
            logger.debug("Reusing scanned tree for %s", key)
        self._last_root = key
        return tree

    def tree_for(self, root: Union[str, Path, None] = None) -> Optional[DirectoryNode]:
        if root is None:
            return self._trees.get(self._last_root) if self._last_root else None
        return self._trees.get(self._resolve(root))

    def generate(self, policy: Optional[SelectionPolicy] = None, root: Union[str, Path, None] = None) -> ProjectContext:
        tree = self.tree_for(root)
        if tree is None:
            raise NotScannedError(root)
        return self.assembler.assemble(tree, policy)

    def invalidate(self, root: Union[str, Path, None] = None) -> None:
        """Forgets a scanned tree, or all of them when root is None."""
        if root is None:
            self._trees.clear()
            self._last_root = None
            return
        key = self._resolve(root)
        self._trees.pop(key, None)
        if self._last_root == key:
            self._last_root = None
