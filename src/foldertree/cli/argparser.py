"""Command-line argument parsing for foldertree.

This module defines the command-line interface for foldertree,
handling argument parsing and validation.
"""

import argparse
import os
import re
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from foldertree import __version__
from foldertree.exclusion_rules.base_rules import BaseExclusionRules
from foldertree.options import DEFAULT_IGNORED_FOLDERS, DEFAULT_MAX_ITEMS


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class for handling exclusion rules.

    This factory function creates an action class that will update the provided
    exclusion rules object as arguments are processed. This preserves the exact
    order of exclusion specifications as they appear on the command line.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action adding -e/--exclude files and -i/--ignore patterns in command-line order."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-e", "--exclude"):
                path = values if isinstance(values, (str, os.PathLike)) else Path(str(values))
                try:
                    exclusion_rules.load_rules(path)
                except FileNotFoundError as e:
                    parser.error(str(e))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            recorded = getattr(namespace, self.dest, None) or []
            recorded.append(values)
            setattr(namespace, self.dest, recorded)

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with foldertree's options.
    """
    description = """
    foldertree: A size-capped directory tree summary suitable for LLM prompts.

    Prints an ASCII tree of a directory, listing at most a fixed number of files and
    folders across the whole tree. Folders such as node_modules and .git are listed but
    never expanded, and the directory's own .gitignore, .ignore, and .foldertreeignore
    files are honored, including negated (!) patterns.

    Entries marked with ... were cut: either the folder was ignored, or the item limit
    was reached and the remaining entries at that level were replaced by placeholders.
    """

    epilog = """
    Examples:
      # Summarize the current directory with the default limit of 200 items
      foldertree .

      # Show at most 50 items, Python files only
      foldertree -n 50 -p '\\.py$' /path/to/project

      # Add ignore rules from a file and from the command line
      foldertree -e .dockerignore -i '*.log' -i '!keep.log' /path/to/project

      # Do not load the project's ignore files
      foldertree -G /path/to/project

      # Replace the default ignored folders
      foldertree --no-default-ignored-folders -x build -x .venv /path/to/project
    """

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"foldertree {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "directory",
        type=Path,
        help="The directory to summarize.",
    )
    parser.add_argument(
        "-n",
        "--max-items",
        type=int,
        default=DEFAULT_MAX_ITEMS,
        metavar="N",
        help=f"Maximum number of files and folders shown across the whole tree (default: {DEFAULT_MAX_ITEMS}).",
    )
    parser.add_argument(
        "-x",
        "--ignore-folder",
        metavar="NAME",
        action="append",
        default=[],
        help=(
            "Folder name that is listed but never expanded (can be specified multiple times). "
            f"Added to the defaults: {', '.join(sorted(DEFAULT_IGNORED_FOLDERS))}."
        ),
    )
    parser.add_argument(
        "--no-default-ignored-folders",
        action="store_true",
        help="Do not include the default ignored folder names; only -x/--ignore-folder names apply.",
    )
    parser.add_argument(
        "-p",
        "--include-pattern",
        metavar="REGEX",
        help="Only list files whose name matches this regular expression. Folders are always listed.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="Path to an additional gitignore-style file (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Individual gitignore-style pattern, e.g. '*.txt', 'build/', or '!important.txt'. "
            "Can be specified multiple times; patterns are applied in the order they appear, "
            "mixed with -e/--exclude options, after the directory's own ignore files."
        ),
    )
    parser.add_argument(
        "-G",
        "--no-gitignore",
        action="store_true",
        help="Do not load the directory's .gitignore, .ignore, or .foldertreeignore files.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log skipped and unreadable directories to stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.max_items < 1:
        raise ValueError(f"--max-items must be a positive integer, got {args.max_items}")
    if args.include_pattern is not None:
        try:
            re.compile(args.include_pattern)
        except re.error as e:
            raise ValueError(f"--include-pattern is not a valid regular expression: {e}")
