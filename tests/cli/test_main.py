"""Unit tests for the CLI main module."""

import contextlib
import io
import os
from unittest.mock import patch

import pytest

from foldertree.cli.argparser import create_parser
from foldertree.cli.main import build_options, main
from foldertree.exclusion_rules.git_rules import GitIgnoreExclusionRules
from foldertree.file_system_tree.folder_structure import FolderStructureBuilder, FolderStructureSummary
from foldertree.options import DEFAULT_IGNORED_FOLDERS


@pytest.fixture
def project(tmp_path):
    (tmp_path / "main.py").touch()
    (tmp_path / "notes.log").touch()
    (tmp_path / "keep.log").touch()
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "out.o").touch()
    (tmp_path / "node_modules").mkdir()
    (tmp_path / ".gitignore").write_text("*.log\nbuild/\n")
    return tmp_path


def run_main(argv):
    """Run main() with the given arguments and return (stdout, stderr, exit code)."""
    stdout, stderr = io.StringIO(), io.StringIO()
    code = 0
    with patch("sys.argv", ["foldertree", *argv]), contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(
        stderr
    ):
        try:
            main()
        except SystemExit as e:
            code = e.code
    return stdout.getvalue(), stderr.getvalue(), code


def parse(argv):
    rules = GitIgnoreExclusionRules()
    args = create_parser(rules).parse_args(argv)
    return args, rules


def test_build_options_loads_directory_ignore_files(project):
    args, rules = parse(["-i", "!keep.log", str(project)])
    options = build_options(args, rules)

    assert options.ignored_folders == DEFAULT_IGNORED_FOLDERS
    assert options.ignore_policy is not None
    assert options.ignore_policy.exclude("notes.log")
    assert not options.ignore_policy.exclude("keep.log")
    assert options.ignore_policy.exclude("build/")


def test_build_options_without_gitignore(project):
    args, rules = parse(["-G", "-i", "*.o", str(project)])
    options = build_options(args, rules)

    assert not options.ignore_policy.exclude("notes.log")
    assert options.ignore_policy.exclude("build/out.o")


def test_build_options_without_any_rules(project):
    args, rules = parse(["-G", str(project)])
    assert build_options(args, rules).ignore_policy is None


def test_build_options_ignored_folders(project):
    args, rules = parse(["-x", "build", str(project)])
    assert build_options(args, rules).ignored_folders == DEFAULT_IGNORED_FOLDERS | {"build"}

    args, rules = parse(["--no-default-ignored-folders", "-x", "build", str(project)])
    assert build_options(args, rules).ignored_folders == frozenset({"build"})


def test_main_prints_tree(project):
    stdout, stderr, code = run_main([str(project)])

    assert code == 0
    assert stderr == ""
    lines = stdout.split("\n")
    assert lines[1].startswith("Showing up to 200 items (files + folders). Folders or files indicated with ...")
    assert lines[3] == f"{project}{os.sep}"
    assert lines[4:] == [
        "├───.gitignore",
        "├───main.py",
        f"├───build{os.sep}...",
        f"└───node_modules{os.sep}...",
        "",
    ]


def test_main_with_max_items_and_pattern(project):
    stdout, _, code = run_main(["-G", "-n", "2", "-p", r"\.log$", str(project)])

    assert code == 0
    assert "Showing up to 2 items (files + folders)." in stdout
    assert stdout.endswith("├───keep.log\n├───notes.log\n├───...\n└───...\n")


def test_main_writes_output_file(project, tmp_path_factory):
    output_file = tmp_path_factory.mktemp("out") / "tree.txt"
    stdout, _, code = run_main(["-o", str(output_file), str(project)])

    assert code == 0
    assert stdout == ""
    assert "├───main.py" in output_file.read_text(encoding="utf-8")


def test_main_unreadable_directory(tmp_path):
    missing = tmp_path / "missing"
    stdout, stderr, code = run_main([str(missing)])

    assert code == 1
    assert stdout == ""
    assert f'Error: Could not read directory "{missing}". Check path and permissions.' in stderr


def test_main_exit_code_follows_unreadable_flag(project):
    summary = FolderStructureSummary("cannot list it", str(project), readable=False)
    with patch.object(FolderStructureBuilder, "summarize", return_value=summary):
        stdout, stderr, code = run_main([str(project)])

    assert code == 1
    assert stdout == ""
    assert "cannot list it" in stderr


def test_main_invalid_max_items(project):
    _, stderr, code = run_main(["-n", "0", str(project)])
    assert code == 1
    assert "Error: --max-items must be a positive integer" in stderr


def test_main_usage_error():
    _, _, code = run_main([])
    assert code == 2
