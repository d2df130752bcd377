# src/projctx/core/render.py
from typing import Dict

from projctx.config import PREVIEW_LENGTH
from projctx.core.tree import generate_project_tree, tree_to_dict
from projctx.models import ProjectContext
from projctx.utils.tokenizer import Tokenizer


def render(context: ProjectContext) -> str:
    """
    Renders the context block: the structure diagram followed by the full
    content of every selected file.
    """
    parts = ["PROJECT CONTEXT:\n\n"]

    parts.append("Project Structure:\n")
    parts.append(generate_project_tree(context.structure))
    parts.append("\n")

    parts.append("Relevant Files:\n\n")
    for fc in context.files:
        parts.append(f"--- FILE: {fc.rel_path} ---\n")
        parts.append(fc.content)
        parts.append("\n\n")

    return "".join(parts)


def enhance_prompt(prompt: str, context: ProjectContext) -> str:
    """Prepends the rendered context block to a user prompt."""
    return f"{render(context)}\n\nUSER QUERY:\n{prompt}"


def _preview(content: str) -> str:
    if len(content) > PREVIEW_LENGTH:
        return content[:PREVIEW_LENGTH] + "..."
    return content


def summarize(context: ProjectContext) -> Dict:
    """A JSON-serializable view of the context with content previews only."""
    return {
        "projectStructure": tree_to_dict(context.structure),
        "relevantFiles": [
            {
                "path": fc.rel_path,
                "extension": fc.extension,
                "lastModified": fc.last_modified.isoformat(),
                "contentPreview": _preview(fc.content),
            }
            for fc in context.files
        ],
    }


def context_metadata(context: ProjectContext) -> Dict:
    block = render(context)
    return {
        "contextAdded": True,
        "filesIncluded": len(context.files),
        "contextSize": len(block),
        "tokens": Tokenizer.count(block),
    }
