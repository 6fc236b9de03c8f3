"""Command-line interface for foldertree.

This module provides the ``foldertree`` command, which prints a size-capped tree
summary of a directory. It handles argument parsing, assembling the ignore rules,
logging setup, and output redirection.

Exit Codes:
    0: Successful completion
    1: Runtime error, including an unreadable directory
    2: Command-line syntax error
    141: Broken pipe (e.g., when piping to `head`)

Example:
    # Summarize a project with at most 100 entries
    $ foldertree -n 100 /path/to/project
"""

import argparse
import logging
import os
import sys

from foldertree.cli.argparser import create_parser, validate_args
from foldertree.exclusion_rules.git_rules import GitIgnoreExclusionRules
from foldertree.file_system_tree.folder_structure import FolderStructureBuilder
from foldertree.options import DEFAULT_IGNORED_FOLDERS, FolderStructureOptions


def build_options(args: argparse.Namespace, cli_rules: GitIgnoreExclusionRules) -> FolderStructureOptions:
    """Turn parsed arguments into builder options.

    The directory's own ignore files are loaded first (unless -G/--no-gitignore was
    given) and the -e/-i rules collected during parsing are applied after them, so
    command-line rules win.

    Args:
        args: Parsed and validated command-line arguments.
        cli_rules: Rules collected from -e/--exclude and -i/--ignore.

    Returns:
        Options for FolderStructureBuilder.
    """
    if args.no_gitignore:
        policy = GitIgnoreExclusionRules(root=args.directory)
    else:
        policy = GitIgnoreExclusionRules.from_directory(args.directory)
    policy.extend(cli_rules)

    ignored_folders = set(args.ignore_folder)
    if not args.no_default_ignored_folders:
        ignored_folders |= DEFAULT_IGNORED_FOLDERS

    return FolderStructureOptions(
        max_items=args.max_items,
        ignored_folders=ignored_folders,
        file_include_pattern=args.include_pattern,
        ignore_policy=policy if policy.has_rules() else None,
    )


def main() -> None:
    """Main entry point for the foldertree command-line interface."""
    try:
        cli_rules = GitIgnoreExclusionRules()
        parser = create_parser(cli_rules)
        args = parser.parse_args()
        validate_args(args)

        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s: %(message)s",
            stream=sys.stderr,
        )

        summary = FolderStructureBuilder(build_options(args, cli_rules)).summarize(args.directory)
        if not summary.readable:
            print(summary.text, file=sys.stderr)
            sys.exit(1)
        output = summary.text

        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(output + "\n")
        else:
            sys.stdout.write(output + "\n")
            sys.stdout.flush()

    except BrokenPipeError:
        # Keep the interpreter from complaining about stdout again on exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(141)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
