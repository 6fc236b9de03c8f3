"""Configuration and per-call traversal state for folder structure summaries."""

import re
from dataclasses import dataclass, field
from typing import AbstractSet, Optional, Pattern, Union

from foldertree.exclusion_rules.base_rules import BaseExclusionRules

DEFAULT_MAX_ITEMS = 200

# Folder names that are never descended into, regardless of ignore rules
DEFAULT_IGNORED_FOLDERS: AbstractSet[str] = frozenset({"node_modules", ".git", "dist"})


@dataclass
class FolderStructureOptions:
    """Options controlling how a folder structure summary is built.

    Attributes:
        max_items: Global cap on the number of files and folders shown across the
            whole tree. Must be a positive integer.
        ignored_folders: Folder basenames that are listed but never descended into.
            This denylist is always active and cannot be overridden by negated
            ignore rules.
        file_include_pattern: Regular expression searched in file basenames. Files
            that do not match are omitted. Folder names are never filtered by it.
            A string is compiled with ``re.compile``.
        ignore_policy: Gitignore-style rules deciding which paths are excluded.
        respect_gitignore: When False, ``ignore_policy`` is bypassed entirely. The
            static ``ignored_folders`` denylist still applies.

    Example:
        >>> options = FolderStructureOptions(max_items=50, file_include_pattern=r"\\.py$")
        >>> options.max_items
        50
        >>> bool(options.file_include_pattern.search("setup.py"))
        True
        >>> FolderStructureOptions(max_items=0)
        Traceback (most recent call last):
            ...
        ValueError: max_items must be a positive integer, got 0
    """

    max_items: int = DEFAULT_MAX_ITEMS
    ignored_folders: AbstractSet[str] = field(default_factory=lambda: set(DEFAULT_IGNORED_FOLDERS))
    file_include_pattern: Optional[Union[str, Pattern[str]]] = None
    ignore_policy: Optional[BaseExclusionRules] = None
    respect_gitignore: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.max_items, bool) or not isinstance(self.max_items, int) or self.max_items < 1:
            raise ValueError(f"max_items must be a positive integer, got {self.max_items!r}")
        if isinstance(self.ignored_folders, str):
            raise ValueError("ignored_folders must be a collection of folder names, not a single string")
        self.ignored_folders = frozenset(self.ignored_folders)
        if isinstance(self.file_include_pattern, str):
            self.file_include_pattern = re.compile(self.file_include_pattern)


@dataclass
class TraversalState:
    """Mutable state shared by every frame of a single traversal.

    One instance is created per ``build()`` call and threaded through the
    recursion by reference; it is never shared between calls.

    Attributes:
        remaining_budget: Items that may still be shown. Never drops below zero.
        truncation_occurred: Set once any ``...`` marker has been emitted.
    """

    remaining_budget: int
    truncation_occurred: bool = False

    def consume(self) -> None:
        """Spend one unit of the item budget."""
        if self.remaining_budget <= 0:
            raise RuntimeError("Item budget is already exhausted")
        self.remaining_budget -= 1

    @property
    def exhausted(self) -> bool:
        return self.remaining_budget == 0
