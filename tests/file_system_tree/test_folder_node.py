"""Unit tests for the FolderNode class."""

from foldertree.file_system_tree.folder_node import TRUNCATION_INDICATOR, FolderNode


def test_folder_node_defaults():
    node = FolderNode("file.txt")
    assert node.name == "file.txt"
    assert not node.is_dir
    assert not node.is_excluded
    assert not node.is_placeholder
    assert node.parent is None


def test_folder_node_children_keep_insertion_order():
    root = FolderNode("root", is_dir=True)
    second = FolderNode("b.txt", parent=root)
    first = FolderNode("a.txt", parent=root)
    assert root.children == (second, first)
    assert first.parent is root


def test_labels():
    root = FolderNode("root", is_dir=True)
    assert FolderNode("main.py", parent=root).label("/") == "main.py"
    assert FolderNode("src", parent=root, is_dir=True).label("/") == "src/"
    assert FolderNode("src", parent=root, is_dir=True).label("\\") == "src\\"
    assert FolderNode("node_modules", parent=root, is_dir=True, is_excluded=True).label("/") == "node_modules/..."


def test_placeholder():
    root = FolderNode("root", is_dir=True)
    placeholder = FolderNode.placeholder(parent=root)
    assert placeholder.is_placeholder
    assert placeholder.name == TRUNCATION_INDICATOR
    assert placeholder.label("/") == "..."
    assert placeholder.parent is root
