# src/projctx/core/assembler.py
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from itertools import islice
from pathlib import Path
from typing import Iterator, List, Optional

from projctx.config import READ_WORKERS
from projctx.core.cache import ContentCache
from projctx.errors import FileReadError, NotScannedError
from projctx.models import (
    DirectoryNode,
    FileContext,
    FileNode,
    ProjectContext,
    SelectionPolicy,
    TreeNode,
)

logger = logging.getLogger(__name__)

# Shared by the module-level assemble() for the life of the process.
_shared_cache = ContentCache()


def select_files(tree: DirectoryNode, policy: SelectionPolicy) -> List[FileNode]:
    """
    Depth-first, pre-order selection of candidate files.
    Stops as soon as `policy.max_files` candidates have been collected.
    """
    return list(islice(_iter_candidates(tree, policy, 0), policy.max_files))


def _iter_candidates(node: TreeNode, policy: SelectionPolicy, depth: int) -> Iterator[FileNode]:
    if depth > policy.max_depth:
        return
    if isinstance(node, DirectoryNode):
        for child in node.children:
            yield from _iter_candidates(child, policy, depth + 1)
    elif policy.accepts(node.rel_path):
        yield node


class ContextAssembler:
    def __init__(self, cache: Optional[ContentCache] = None, max_workers: int = READ_WORKERS):
        self.cache = cache if cache is not None else ContentCache()
        self.max_workers = max_workers

    def assemble(self, tree: Optional[DirectoryNode], policy: Optional[SelectionPolicy] = None) -> ProjectContext:
        if tree is None:
            raise NotScannedError()
        policy = policy or SelectionPolicy()

        selected = select_files(tree, policy)
        base = tree.origin if tree.origin is not None else Path(os.getcwd())

        if selected:
            workers = max(1, min(self.max_workers, len(selected)))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                # map() yields in submission order, whichever read finishes first.
                results = list(executor.map(lambda node: self._load(base, node), selected))
        else:
            results = []

        files = tuple(fc for fc in results if fc is not None)
        logger.debug("Assembled %d of %d selected files", len(files), len(selected))
        return ProjectContext(structure=tree, files=files)

    def _load(self, base: Path, node: FileNode) -> Optional[FileContext]:
        abs_path = base / node.rel_path
        try:
            entry = self.cache.get(abs_path)
        except FileReadError as e:
            logger.warning("Skipping %s (%s)", node.rel_path, e.reason)
            return None
        return FileContext(
            path=abs_path,
            rel_path=node.rel_path,
            extension=node.extension,
            last_modified=entry.last_modified,
            content=entry.content,
        )


def assemble(
    tree: Optional[DirectoryNode],
    policy: Optional[SelectionPolicy] = None,
    cache: Optional[ContentCache] = None,
) -> ProjectContext:
    """Selects files from tree under policy and loads their contents."""
    return ContextAssembler(cache if cache is not None else _shared_cache).assemble(tree, policy)
