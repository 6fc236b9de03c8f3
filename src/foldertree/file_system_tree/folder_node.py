"""Node representation for lines of a rendered folder structure."""

from typing import Any, Optional

from anytree import Node

# Text standing in for content that is not shown
TRUNCATION_INDICATOR = "..."


class FolderNode(Node):  # type: ignore
    """Node class representing one line of a folder structure summary.

    Extends anytree.Node so that the rendered tree keeps its parent/child links and
    sibling order; a node's indentation depends only on its chain of ancestors and
    on whether each of them is the last of its siblings.

    A node is one of:
    - a file (``is_dir`` False),
    - a directory (``is_dir`` True), possibly ``is_excluded`` so that it is shown
      with a trailing ``...`` and no children,
    - a placeholder (``is_placeholder`` True) for an entry omitted because the item
      budget ran out.

    Attributes:
        name (str): Basename of the entry, or ``...`` for placeholders.
        is_dir (bool): True if the node represents a directory.
        is_excluded (bool): True if the directory was not descended into because it
            is ignored.
        is_placeholder (bool): True if the node stands in for an omitted entry.

    Example:
        >>> root = FolderNode("project", is_dir=True)
        >>> src = FolderNode("src", parent=root, is_dir=True)
        >>> src.label("/")
        'src/'
        >>> FolderNode("node_modules", parent=root, is_dir=True, is_excluded=True).label("/")
        'node_modules/...'
        >>> FolderNode.placeholder(parent=root).label("/")
        '...'
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FolderNode"] = None,
        is_dir: bool = False,
        is_excluded: bool = False,
        is_placeholder: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir
        self.is_excluded = is_excluded
        self.is_placeholder = is_placeholder

    @classmethod
    def placeholder(cls, parent: Optional["FolderNode"] = None) -> "FolderNode":
        """Create a node standing in for an entry dropped by the item budget."""
        return cls(TRUNCATION_INDICATOR, parent=parent, is_placeholder=True)

    def label(self, separator: str) -> str:
        """Text shown for this node after its branch connector.

        Args:
            separator: Path separator appended to directory names.
        """
        if self.is_placeholder:
            return TRUNCATION_INDICATOR
        if not self.is_dir:
            return self.name
        if self.is_excluded:
            return f"{self.name}{separator}{TRUNCATION_INDICATOR}"
        return f"{self.name}{separator}"
