"""Thin adapter listing the entries of one directory."""

import os
from dataclasses import dataclass
from typing import List

from foldertree.exceptions import NotReadableError
from foldertree.types import EntryKind, PathType


@dataclass(frozen=True)
class DirectoryEntry:
    """A single file or directory found in a directory listing.

    Attributes:
        name (str): Basename of the entry.
        kind (EntryKind): Whether the entry is a file or a directory.
    """

    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


def list_entries(path: PathType) -> List[DirectoryEntry]:
    """List the files and directories directly inside ``path``.

    Entries are returned in the order the operating system reports them. Symbolic
    links are not followed and, like sockets, FIFOs, and device files, are not
    reported at all.

    Args:
        path: Directory to list.

    Returns:
        The regular files and directories found in ``path``.

    Raises:
        NotReadableError: If ``path`` does not exist, is not a directory, or cannot be
            read because of missing permissions.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     (Path(tmpdir) / "docs").mkdir()
        ...     (Path(tmpdir) / "README.md").touch()
        ...     sorted((entry.name, entry.kind.value) for entry in list_entries(tmpdir))
        [('README.md', 'file'), ('docs', 'directory')]
    """
    entries: List[DirectoryEntry] = []
    try:
        with os.scandir(path) as iterator:
            for item in iterator:
                if item.is_dir(follow_symlinks=False):
                    entries.append(DirectoryEntry(item.name, EntryKind.DIRECTORY))
                elif item.is_file(follow_symlinks=False):
                    entries.append(DirectoryEntry(item.name, EntryKind.FILE))
    except OSError as e:
        raise NotReadableError(os.fspath(path), e.strerror or str(e)) from e
    return entries
