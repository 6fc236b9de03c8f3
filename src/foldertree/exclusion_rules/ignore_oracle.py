"""Exclusion decisions for entries met while walking a directory."""

import logging
import os
from pathlib import Path
from typing import AbstractSet, Optional

from foldertree.types import EntryKind, PathType

from .base_rules import BaseExclusionRules

logger = logging.getLogger(__name__)


class IgnoreOracle:
    """Answer whether a file or directory is excluded from a folder structure summary.

    Two sources are combined:

    - The static folder denylist. A directory whose basename is listed is always
      excluded, whatever ``respect_gitignore`` says and whatever negated patterns the
      ignore policy holds. Files are never affected by it.
    - The ignore policy, consulted only when ``respect_gitignore`` is True. Paths are
      made relative to the policy's own root (or to ``root`` when the policy has none)
      before being handed to it. Paths outside that root are never excluded by it.

    Attributes:
        root (Path): Directory being summarized.
        ignored_folders (AbstractSet[str]): Folder basenames that are always excluded.
        ignore_policy (Optional[BaseExclusionRules]): Gitignore-aware rules, if any.
        respect_gitignore (bool): Whether the ignore policy is consulted at all.

    Example:
        >>> from foldertree.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> policy = GitIgnoreExclusionRules()
        >>> policy.add_rule("*.log")
        >>> oracle = IgnoreOracle("/project", {"node_modules"}, policy)
        >>> oracle.is_excluded("/project/node_modules", EntryKind.DIRECTORY)
        True
        >>> oracle.is_excluded("/project/server.log", EntryKind.FILE)
        True
        >>> oracle.is_excluded("/project/node_modules", EntryKind.FILE)
        False
    """

    def __init__(
        self,
        root: PathType,
        ignored_folders: AbstractSet[str],
        ignore_policy: Optional[BaseExclusionRules] = None,
        respect_gitignore: bool = True,
    ) -> None:
        self.root = Path(root)
        self.ignored_folders = ignored_folders
        self.ignore_policy = ignore_policy
        self.respect_gitignore = respect_gitignore

    def is_excluded(self, path: PathType, kind: EntryKind) -> bool:
        """Check whether an entry is excluded.

        For directories, True means the directory is listed but not descended into.
        For files, True means the file is not listed at all.

        Args:
            path: Path of the entry, absolute or relative to the current directory.
            kind: Whether the entry is a file or a directory.

        Returns:
            bool: True if the entry is excluded.
        """
        if kind is EntryKind.DIRECTORY and os.path.basename(os.fspath(path)) in self.ignored_folders:
            return True

        relative_path = self._policy_path(path, kind)
        if relative_path is None or not self.ignore_policy.exclude(relative_path):  # type: ignore[union-attr]
            return False

        if kind is EntryKind.DIRECTORY and self.ignore_policy.reincludes_within(relative_path):  # type: ignore[union-attr]
            logger.debug("Walking excluded directory %s for re-included entries", relative_path)
            return False

        return True

    def holds_only_reincluded(self, path: PathType) -> bool:
        """Check whether a directory is walked only for the entries a negated pattern re-includes.

        Such a directory is excluded by the ignore policy, but ``is_excluded`` reports it
        as walkable because a negated pattern may match below it. Everything inside it
        is hidden except what a negation actually brings back.

        Args:
            path: Path of the directory.

        Returns:
            bool: True if the directory is policy-excluded and kept open by a negation.
        """
        if os.path.basename(os.fspath(path)) in self.ignored_folders:
            return False

        relative_path = self._policy_path(path, EntryKind.DIRECTORY)
        if relative_path is None:
            return False
        policy = self.ignore_policy
        return policy is not None and policy.exclude(relative_path) and policy.reincludes_within(relative_path)

    def _policy_path(self, path: PathType, kind: EntryKind) -> Optional[str]:
        """Express ``path`` the way the ignore policy expects it, or None if the policy does not apply."""
        if not self.respect_gitignore or self.ignore_policy is None:
            return None

        policy_root = self.ignore_policy.root if self.ignore_policy.root else self.root
        relative_path = os.path.relpath(os.path.abspath(os.fspath(path)), os.path.abspath(policy_root))
        if relative_path == os.curdir or relative_path == os.pardir or relative_path.startswith(os.pardir + os.sep):
            return None

        relative_path = relative_path.replace(os.sep, "/")
        if kind is EntryKind.DIRECTORY:
            relative_path += "/"
        return relative_path
