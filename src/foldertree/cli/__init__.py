"""Command-line interface for foldertree."""
