"""Budgeted folder structure summaries.

This module provides the FolderStructureBuilder class, which walks a directory depth
first under a global item budget and renders what it saw as an ASCII tree, and the
get_folder_structure convenience function.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from foldertree.exceptions import NotReadableError
from foldertree.exclusion_rules.ignore_oracle import IgnoreOracle
from foldertree.file_system_tree.entry_reader import DirectoryEntry, list_entries
from foldertree.file_system_tree.folder_node import TRUNCATION_INDICATOR, FolderNode
from foldertree.options import FolderStructureOptions, TraversalState
from foldertree.types import EntryKind, PathType

logger = logging.getLogger(__name__)

READ_ERROR_TEMPLATE = 'Error: Could not read directory "{path}". Check path and permissions.'

BRANCH = "├───"
LAST_BRANCH = "└───"
VERTICAL = "│   "
SPACE = "    "


@dataclass(frozen=True)
class FolderStructureSummary:
    """Outcome of one build.

    Attributes:
        text: The rendered summary, or the error line when the root could not be read.
        root: Absolute path of the summarized directory.
        readable: False when the root directory could not be listed.
        truncated: True when any ``...`` marker appears in ``text``.
    """

    text: str
    root: str
    readable: bool = True
    truncated: bool = False


class FolderStructureBuilder:
    """Builds size-capped tree summaries of directories.

    The walk is depth first, but each directory's whole entry list is paid for out of
    the global item budget before any of its subdirectories is opened. This yields
    two kinds of truncation:

    - When the budget runs out partway through a list, every remaining sibling is
      shown as a bare ``...`` line.
    - When the budget is already spent before a subdirectory is opened, that
      subdirectory is simply shown without children, with no marker.

    Directories that are ignored (static denylist or ignore policy) are listed as
    ``name/...`` and not descended into. Ignored files, and files that do not match
    ``file_include_pattern``, are left out without costing anything.

    The builder holds no per-call state, so one instance can serve any number of
    ``build`` calls, including concurrent ones.

    Attributes:
        options (FolderStructureOptions): Options applied to every build.

    Example:
        >>> builder = FolderStructureBuilder(FolderStructureOptions(max_items=4))  # doctest: +SKIP
        >>> print(builder.build("manyFolders"))  # doctest: +SKIP
        <BLANKLINE>
        Showing up to 4 items (files + folders). Folders or files indicated with ... contain more items ...
        <BLANKLINE>
        /work/manyFolders/
        ├───folder-0/
        ├───folder-1/
        ├───folder-2/
        ├───folder-3/
        └───...
    """

    def __init__(self, options: Optional[FolderStructureOptions] = None) -> None:
        self.options = options if options is not None else FolderStructureOptions()

    def build(self, root_path: PathType) -> str:
        """Render the folder structure of ``root_path``.

        Shorthand for ``summarize(root_path).text``.

        Args:
            root_path: Directory to summarize. Relative paths are made absolute.

        Returns:
            The header followed by the rendered tree, or a single error line if the
            root directory cannot be read. Filesystem errors are never raised.
        """
        return self.summarize(root_path).text

    def summarize(self, root_path: PathType) -> FolderStructureSummary:
        """Build the summary of ``root_path`` and report how it went.

        Args:
            root_path: Directory to summarize. Relative paths are made absolute.

        Returns:
            The rendered text together with whether the root was readable and whether
            anything was truncated.
        """
        root = os.path.abspath(os.fspath(root_path))
        state = TraversalState(remaining_budget=self.options.max_items)
        oracle = IgnoreOracle(
            root,
            self.options.ignored_folders,
            ignore_policy=self.options.ignore_policy,
            respect_gitignore=self.options.respect_gitignore,
        )

        try:
            root_entries = self._read_entries(Path(root), oracle)
        except NotReadableError as e:
            logger.warning("%s", e)
            return FolderStructureSummary(READ_ERROR_TEMPLATE.format(path=root), root, readable=False)

        tree = FolderNode(os.path.basename(root) or root, is_dir=True)
        self._fill(tree, Path(root), root_entries, oracle, state)

        lines = [self._header(state.truncation_occurred), ""]
        lines.append(root if root.endswith(os.sep) else root + os.sep)
        lines.extend(self.stream_tree_lines(tree))
        return FolderStructureSummary("\n" + "\n".join(lines), root, truncated=state.truncation_occurred)

    def _header(self, truncated: bool) -> str:
        max_items = self.options.max_items
        summary = f"Showing up to {max_items} items (files + folders)."
        if truncated:
            summary += (
                f" Folders or files indicated with {TRUNCATION_INDICATOR} contain more items not shown,"
                f" were ignored, or the display limit ({max_items} items) was reached."
            )
        return summary

    def _read_entries(self, directory: Path, oracle: IgnoreOracle) -> List[DirectoryEntry]:
        """Read, filter, and order the entries of one directory.

        Files come first, then directories, each sorted by code point. Excluded files
        and files not matching the include pattern are dropped; directories are kept
        whether or not they are excluded.

        Raises:
            NotReadableError: If the directory cannot be listed.
        """
        pattern = self.options.file_include_pattern
        files: List[DirectoryEntry] = []
        directories: List[DirectoryEntry] = []
        for entry in list_entries(directory):
            if entry.is_dir:
                directories.append(entry)
                continue
            if oracle.is_excluded(directory / entry.name, EntryKind.FILE):
                continue
            if pattern is not None and not pattern.search(entry.name):  # type: ignore[union-attr]
                continue
            files.append(entry)

        files.sort(key=lambda entry: entry.name)
        directories.sort(key=lambda entry: entry.name)
        return files + directories

    def _fill(
        self,
        node: FolderNode,
        directory: Path,
        entries: List[DirectoryEntry],
        oracle: IgnoreOracle,
        state: TraversalState,
    ) -> None:
        """Attach ``entries`` below ``node`` and recurse into its subdirectories."""
        pending = []
        for index, entry in enumerate(entries):
            if state.exhausted:
                for _ in entries[index:]:
                    FolderNode.placeholder(parent=node)
                state.truncation_occurred = True
                break

            state.consume()
            child = FolderNode(entry.name, parent=node, is_dir=entry.is_dir)
            if not entry.is_dir:
                continue

            child_path = directory / entry.name
            if self._is_hidden(child_path, oracle):
                logger.debug("Not descending into excluded directory %s", child_path)
                child.is_excluded = True
                state.truncation_occurred = True
            else:
                pending.append((child, child_path))

        for child, child_path in pending:
            if state.exhausted:
                logger.debug("Item budget exhausted before reading %s", child_path)
                continue
            try:
                child_entries = self._read_entries(child_path, oracle)
            except NotReadableError as e:
                logger.warning("%s", e)
                continue
            self._fill(child, child_path, child_entries, oracle, state)

    def _is_hidden(self, directory: Path, oracle: IgnoreOracle) -> bool:
        """Check whether a directory is shown as ``name/...`` instead of being opened.

        A directory that is ignored but kept open by a negated pattern is only worth
        opening when something below it is actually re-included.
        """
        if oracle.is_excluded(directory, EntryKind.DIRECTORY):
            return True
        return oracle.holds_only_reincluded(directory) and not self._reveals_entries(directory, oracle)

    def _reveals_entries(self, directory: Path, oracle: IgnoreOracle) -> bool:
        """Check whether opening an ignored directory would show at least one entry it re-includes."""
        try:
            entries = self._read_entries(directory, oracle)
        except NotReadableError as e:
            logger.debug("%s", e)
            return False

        for entry in entries:
            if not entry.is_dir:
                return True
            child_path = directory / entry.name
            if oracle.is_excluded(child_path, EntryKind.DIRECTORY):
                continue
            if not oracle.holds_only_reincluded(child_path) or self._reveals_entries(child_path, oracle):
                return True
        return False

    def stream_tree_lines(self, tree: FolderNode) -> Iterator[str]:
        """Generate the body lines for a built tree, one line at a time.

        The root node itself is not rendered; its children start at column zero.

        Args:
            tree: Root node of the tree.

        Yields:
            Lines made of the indentation, the branch connector, and the node label.

        Example:
            >>> root = FolderNode("root", is_dir=True)
            >>> sub = FolderNode("sub", parent=root, is_dir=True)
            >>> _ = FolderNode("a.txt", parent=sub)
            >>> _ = FolderNode("b.txt", parent=root)
            >>> for line in FolderStructureBuilder().stream_tree_lines(root):
            ...     print(line.replace(os.sep, "/"))
            ├───sub/
            │   └───a.txt
            └───b.txt
        """

        def write_node(node: FolderNode, prefix: str) -> Iterator[str]:
            children = node.children
            for i, child in enumerate(children):
                is_last = i == len(children) - 1
                connector = LAST_BRANCH if is_last else BRANCH
                yield f"{prefix}{connector}{child.label(os.sep)}"
                if child.children:
                    yield from write_node(child, prefix + (SPACE if is_last else VERTICAL))

        yield from write_node(tree, "")


def get_folder_structure(root_path: PathType, options: Optional[FolderStructureOptions] = None) -> str:
    """Render a budgeted tree summary of ``root_path``.

    Convenience wrapper around ``FolderStructureBuilder(options).build(root_path)``.

    Args:
        root_path: Directory to summarize.
        options: Summary options. Defaults to ``FolderStructureOptions()``.

    Returns:
        The rendered summary, or a single error line if ``root_path`` cannot be read.

    Example:
        >>> print(get_folder_structure("/nonexistent"))
        Error: Could not read directory "/nonexistent". Check path and permissions.
    """
    return FolderStructureBuilder(options).build(root_path)
