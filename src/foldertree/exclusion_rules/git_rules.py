"""Implementation of exclusion rules using .gitignore pattern syntax."""

import logging
from fnmatch import fnmatchcase
from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from foldertree.types import PathType

from .base_rules import BaseExclusionRules

logger = logging.getLogger(__name__)

# Ignore files picked up by from_directory(), in the order their rules are applied
IGNORE_FILE_NAMES = (".git/info/exclude", ".gitignore", ".ignore", ".foldertreeignore")


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Implementation of exclusion rules using .gitignore pattern syntax.

    Paths are matched with the pathspec library the same way Git does. The rules
    support all standard .gitignore syntax including:
    - Basic globs (*, ?, [abc], [0-9], etc.)
    - Directory-specific patterns (ending in /)
    - Negation patterns (starting with !)
    - Double-asterisk matching (**)
    - Comment lines (starting with #)

    Rules from all sources are combined in the order they are added and the last
    matching rule decides, so a later ``!pattern`` re-includes a path excluded by an
    earlier one. Unlike Git, a negation also reaches inside a directory excluded by a
    pattern: with ``.gemini/`` followed by ``!/.gemini/config.yaml`` the folder is still
    walked and only ``config.yaml`` survives (see ``reincludes_within``).

    Attributes:
        spec (PathSpec): Compiled pattern matcher from the pathspec library.
        root (Optional[Path]): Directory the patterns are anchored at.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("node_modules/")
        >>> rules.exclude("node_modules/package.json")
        True
        >>> rules.add_rule("*.log")
        >>> rules.exclude("app.log")
        True
        >>> rules.add_rule("!keep.log")
        >>> rules.exclude("keep.log")
        False

    Note:
        The paths provided to exclude() should use forward slashes (/) as path separators,
        even on Windows systems, to match Git's behavior.
    """

    def __init__(
        self,
        rules_files: Optional[Union[PathType, Sequence[PathType]]] = None,
        root: Optional[PathType] = None,
    ):
        """Initialize GitIgnoreExclusionRules with patterns from specified files.

        Args:
            rules_files: Path(s) to the file(s) containing .gitignore patterns.
            root: Directory the patterns are relative to. When None, patterns are
                anchored at the directory being summarized.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self.root = Path(root) if root is not None else None
        self._lines: List[str] = []
        self._negations: List[str] = []
        self.spec = PathSpec.from_lines(GitWildMatchPattern, [])

        if rules_files is not None:
            self.load_rules(rules_files)

    @classmethod
    def from_directory(cls, root: PathType) -> "GitIgnoreExclusionRules":
        """Build rules bound to ``root`` from the ignore files found there.

        The files in ``IGNORE_FILE_NAMES`` are read in order when they exist; missing
        ones are skipped. Nested ignore files in subdirectories are not consulted.

        Args:
            root: Directory whose ignore files should be loaded.

        Returns:
            A rules object anchored at ``root``. It has no rules when no ignore file exists.

        Example:
            >>> import tempfile
            >>> with tempfile.TemporaryDirectory() as tmpdir:
            ...     _ = (Path(tmpdir) / ".gitignore").write_text("*.pyc\\n")
            ...     rules = GitIgnoreExclusionRules.from_directory(tmpdir)
            >>> rules.exclude("cache/module.pyc")
            True
        """
        rules = cls(root=root)
        found = [path for path in (Path(root) / name for name in IGNORE_FILE_NAMES) if path.is_file()]
        if found:
            logger.debug("Loading ignore rules from %s", ", ".join(str(path) for path in found))
            rules.load_rules(found)
        return rules

    def exclude(self, path: str) -> bool:
        """Check if a path should be excluded based on the loaded .gitignore patterns.

        The path is matched exactly as provided; a trailing slash marks a directory so
        that directory-only patterns such as ``build/`` apply to it.

        Args:
            path: The path to check, relative to the rules' root.

        Returns:
            bool: True if the last pattern matching the path is not negated.

        Example:
            >>> rules = GitIgnoreExclusionRules()
            >>> for rule in ("*.pyc", "!important.pyc", "build/"):
            ...     rules.add_rule(rule)
            >>> rules.exclude("test.pyc")
            True
            >>> rules.exclude("important.pyc")
            False
            >>> rules.exclude("build/")
            True
            >>> rules.exclude("build")
            False
        """
        return bool(self.spec.match_file(path))

    def reincludes_within(self, directory: str) -> bool:
        """Check whether a negated pattern points at a path below ``directory``.

        Only negations that name a path (they contain a slash other than a trailing one,
        e.g. ``!/.gemini/config.yaml`` or ``!docs/*.md``) are considered; a bare
        ``!name`` does not make every excluded directory walkable.

        Args:
            directory: Directory path relative to the rules' root.

        Returns:
            bool: True if some negated pattern could match a descendant of ``directory``.

        Example:
            >>> rules = GitIgnoreExclusionRules()
            >>> for rule in (".gemini/", "!/.gemini/config.yaml", "logs/", "!keep.log"):
            ...     rules.add_rule(rule)
            >>> rules.reincludes_within(".gemini/")
            True
            >>> rules.reincludes_within("logs/")
            False
        """
        directory_parts = [part for part in directory.split("/") if part]
        for negation in self._negations:
            pattern = negation.rstrip("/")
            if "/" not in pattern:
                continue
            if _reaches_below(pattern.lstrip("/").split("/"), directory_parts):
                return True
        return False

    def has_rules(self) -> bool:
        """Check if any pattern other than comments and blank lines has been loaded."""
        return any(pattern.include is not None for pattern in self.spec.patterns)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and combine .gitignore patterns from one or more files.

        Patterns are appended after those already loaded, so they take precedence
        over earlier ones.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.

        Example:
            >>> import os
            >>> import tempfile
            >>> with tempfile.NamedTemporaryFile(mode='w', delete=False) as f1:
            ...     _ = f1.write('*.txt\\n')
            >>> with tempfile.NamedTemporaryFile(mode='w', delete=False) as f2:
            ...     _ = f2.write('!important.txt\\n')
            >>> rules = GitIgnoreExclusionRules(f1.name)
            >>> rules.exclude("test.txt")
            True
            >>> rules.load_rules(f2.name)
            >>> rules.exclude("important.txt")
            False
            >>> os.unlink(f1.name)
            >>> os.unlink(f2.name)
        """
        # Convert to list if it's a single path
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        lines: List[str] = []
        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r", encoding="utf-8") as f:
                lines.extend(f.read().splitlines())

        self._add_lines(lines)

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern directly.

        Args:
            rule: A single .gitignore pattern to add (e.g., "*.pyc", "node_modules/",
                 "!important.txt").

        Example:
            >>> rules = GitIgnoreExclusionRules()
            >>> rules.add_rule("*.pyc")
            >>> rules.exclude("test.pyc")
            True
            >>> rules.exclude("test.py")
            False
        """
        self._add_lines([rule])

    def extend(self, other: "GitIgnoreExclusionRules") -> None:
        """Append all patterns of ``other`` after the patterns of this object.

        The root of this object is kept.

        Args:
            other: Rules whose patterns should take precedence over the current ones.
        """
        self._add_lines(other._lines)

    def _add_lines(self, lines: Sequence[str]) -> None:
        for line in lines:
            stripped = line.rstrip()
            if stripped.startswith("!") and len(stripped) > 1:
                self._negations.append(stripped[1:])
        self._lines.extend(lines)
        self.spec = PathSpec.from_lines(GitWildMatchPattern, self._lines)


def _reaches_below(pattern_parts: Sequence[str], directory_parts: Sequence[str]) -> bool:
    """Check whether a slash-separated pattern can match something inside a directory."""
    for index, directory_part in enumerate(directory_parts):
        if index >= len(pattern_parts) - 1:
            return False
        pattern_part = pattern_parts[index]
        if pattern_part == "**":
            return True
        if not fnmatchcase(directory_part, pattern_part):
            return False
    return len(pattern_parts) > len(directory_parts)
