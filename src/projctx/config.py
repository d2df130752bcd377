# src/projctx/config.py

# Matched against the bare entry name while walking.
DEFAULT_PRUNE_PATTERNS = [
    "# Default pruning rules",
    "node_modules",
    ".git",
    "dist",
    "build",
    ".*",
]

CODE_EXTENSIONS = frozenset([".js", ".jsx", ".ts", ".tsx", ".json", ".html", ".css"])

DEFAULT_MAX_FILES = 10
DEFAULT_MAX_DEPTH = 3

DEFAULT_IGNORE_FILE = ".contextignore"

PREVIEW_LENGTH = 200

READ_WORKERS = 8

DIRECTORY_GLYPH = "📁"
FILE_GLYPH = "📄"
