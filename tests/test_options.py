"""Tests for builder options and traversal state."""

import re

import pytest

from foldertree.exclusion_rules.git_rules import GitIgnoreExclusionRules
from foldertree.options import (
    DEFAULT_IGNORED_FOLDERS,
    DEFAULT_MAX_ITEMS,
    FolderStructureOptions,
    TraversalState,
)


class TestFolderStructureOptions:
    """Test FolderStructureOptions defaults and validation."""

    def test_defaults(self):
        options = FolderStructureOptions()
        assert options.max_items == DEFAULT_MAX_ITEMS == 200
        assert options.ignored_folders == DEFAULT_IGNORED_FOLDERS
        assert {"node_modules", ".git"} <= options.ignored_folders
        assert options.file_include_pattern is None
        assert options.ignore_policy is None
        assert options.respect_gitignore is True

    def test_string_pattern_is_compiled(self):
        options = FolderStructureOptions(file_include_pattern=r"\.ts$")
        assert isinstance(options.file_include_pattern, re.Pattern)
        assert options.file_include_pattern.search("index.ts")
        assert not options.file_include_pattern.search("index.js")

    def test_compiled_pattern_is_kept(self):
        pattern = re.compile(r"\.md$")
        assert FolderStructureOptions(file_include_pattern=pattern).file_include_pattern is pattern

    def test_ignored_folders_are_frozen(self):
        names = {"build"}
        options = FolderStructureOptions(ignored_folders=names)
        names.add("dist")
        assert options.ignored_folders == frozenset({"build"})

    def test_ignore_policy(self):
        policy = GitIgnoreExclusionRules()
        assert FolderStructureOptions(ignore_policy=policy).ignore_policy is policy

    @pytest.mark.parametrize("max_items", [0, -5, 2.5, "10", True])
    def test_invalid_max_items(self, max_items):
        with pytest.raises(ValueError, match="max_items must be a positive integer"):
            FolderStructureOptions(max_items=max_items)

    def test_single_string_ignored_folders(self):
        with pytest.raises(ValueError, match="ignored_folders"):
            FolderStructureOptions(ignored_folders="node_modules")

    def test_invalid_pattern(self):
        with pytest.raises(re.error):
            FolderStructureOptions(file_include_pattern="(")


class TestTraversalState:
    """Test TraversalState budget accounting."""

    def test_consume(self):
        state = TraversalState(remaining_budget=2)
        assert not state.exhausted
        state.consume()
        state.consume()
        assert state.remaining_budget == 0
        assert state.exhausted
        assert state.truncation_occurred is False

    def test_consume_never_goes_negative(self):
        state = TraversalState(remaining_budget=0)
        with pytest.raises(RuntimeError):
            state.consume()
        assert state.remaining_budget == 0
