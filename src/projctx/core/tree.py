# src/projctx/core/tree.py
from typing import Dict, List

from projctx.config import DIRECTORY_GLYPH, FILE_GLYPH
from projctx.models import DirectoryNode, TreeNode


def generate_project_tree(node: TreeNode) -> str:
    """Generates a depth-indented string representation of the project tree."""
    lines: List[str] = []

    def _generate_lines_recursive(current: TreeNode, depth: int):
        indent = "  " * depth
        if isinstance(current, DirectoryNode):
            lines.append(f"{indent}{DIRECTORY_GLYPH} {current.name}/")
            for child in current.children:
                _generate_lines_recursive(child, depth + 1)
        else:
            lines.append(f"{indent}{FILE_GLYPH} {current.name}")

    _generate_lines_recursive(node, 0)
    return "\n".join(lines) + "\n"


def tree_to_dict(node: TreeNode) -> Dict:
    """Converts a tree into plain nested dicts for JSON output."""
    if isinstance(node, DirectoryNode):
        return {
            "type": "directory",
            "name": node.name,
            "path": node.rel_path,
            "children": [tree_to_dict(child) for child in node.children],
        }
    return {
        "type": "file",
        "name": node.name,
        "path": node.rel_path,
        "extension": node.extension,
    }
