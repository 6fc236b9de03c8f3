"""Bounded directory tree summaries.

This package renders a size-capped ASCII tree of a directory, honoring a static
folder denylist and .gitignore-style ignore rules, so that a project's layout
can be handed to a Large Language Model (LLM) without overflowing its context.
"""

from importlib.metadata import PackageNotFoundError, version

from .file_system_tree.folder_structure import FolderStructureBuilder, FolderStructureSummary, get_folder_structure
from .options import FolderStructureOptions

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("foldertree")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "FolderStructureBuilder",
    "FolderStructureOptions",
    "FolderStructureSummary",
    "get_folder_structure",
    "__version__",
]
