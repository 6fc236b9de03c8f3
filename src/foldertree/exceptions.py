from typing import Optional


class NotReadableError(OSError):
    """
    Exception raised when a directory cannot be listed.

    This covers every reason a directory listing can fail: the path does not exist,
    is not a directory, or permission to read it is denied. The underlying ``OSError``
    is kept as ``__cause__`` when the error is raised from one.

    Attributes:
        path (str): Path of the directory that could not be read.
        reason (Optional[str]): Short description of the underlying failure, if known.

    Example:
        >>> error = NotReadableError("/missing")
        >>> str(error)
        'Could not read directory: /missing'
        >>> error = NotReadableError("/root/secret", "Permission denied")
        >>> str(error)
        'Could not read directory: /root/secret (Permission denied)'
    """

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        """
        Initialize the exception with the path that could not be read.

        Args:
            path (str): Path of the unreadable directory.
            reason (str, optional): Description of the underlying failure.
        """
        self.path = path
        self.reason = reason
        message = f"Could not read directory: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
