from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Union

from foldertree.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the ignore-policy capability used during traversal.

    The folder structure builder depends only on this interface: one query telling it
    whether a path is excluded. Concrete implementations decide how rules are expressed
    (e.g., .gitignore patterns). File loading and individual rule addition are optional
    capabilities that depend on the rule type.

    Paths handed to ``exclude`` are relative to ``root`` (or to the traversal root when
    ``root`` is None), use forward slashes, and carry a trailing slash for directories.

    Attributes:
        root (Optional[Path]): Directory the rules are anchored at, or None to anchor them
            at whatever directory is being summarized.

    Example:
        >>> from foldertree.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> git_rules = GitIgnoreExclusionRules()
        >>> git_rules.add_rule('*.pyc')  # Add rule programmatically
        >>> git_rules.exclude('test.pyc')
        True
        >>> git_rules.exclude('test.py')
        False
    """

    root: Optional[Path] = None

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded based on the loaded rules.

        Args:
            path (str): The file or directory path to check, relative to the rules' root.
                Directory paths end with "/".

        Returns:
            bool: True if the path should be excluded, False if it should be included.

        Example:
            >>> class TmpExclusionRules(BaseExclusionRules):
            ...     def exclude(self, path: str) -> bool:
            ...         return path.endswith('.tmp')
            >>> rules = TmpExclusionRules()
            >>> rules.exclude("build/temp.tmp")
            True
            >>> rules.exclude("main.py")
            False
        """
        pass

    def reincludes_within(self, directory: str) -> bool:
        """
        Report whether a rule may re-include a path below an excluded directory.

        The builder asks this for directories that ``exclude`` rejected. Returning True
        makes it descend anyway and filter the directory's children one by one. Rule types
        without negation never re-include anything, which is the default.

        Args:
            directory (str): Directory path relative to the rules' root, ending with "/".

        Returns:
            bool: True if some path inside ``directory`` could be included again.
        """
        return False

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and parse exclusion rules from one or more files.

        Args:
            rules_files: Path to a file or sequence of paths containing exclusion rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
            FileNotFoundError: If any rules file does not exist (for file-supporting rule types).
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Args:
            rule (str): The exclusion rule to add. The format depends on the specific
                implementation (e.g., a gitignore pattern like "*.pyc").

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
