"""Directory reading and folder structure rendering.

This package reads directory entries from the filesystem and turns them into a
budgeted, ASCII-art tree summary.
"""
