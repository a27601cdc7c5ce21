"""
Error types for the App Icon Generator.

The classes extend the built-in exceptions the rest of the library raises
(ValueError for bad input, OSError for file system problems), so callers
can catch either the specific type or the built-in one.

Classes:
    IconGeneratorError: Base class for all library errors
    ValidationError: Job or session rejected before any work started
    ExportInProgressError: A second export was requested while one is running
    ImageDecodeError: Source image could not be read or decoded
    OutputDirectoryError: Output folder could not be created

Functions:
    classify_filesystem_error: Wrap an OSError into an OutputDirectoryError
"""

import errno
from pathlib import Path
from typing import Optional, Union

_PERMISSION_ERRNOS = {errno.EACCES, errno.EPERM, errno.EROFS}


class IconGeneratorError(Exception):
    """Base class for App Icon Generator errors."""


class ValidationError(IconGeneratorError, ValueError):
    """Raised when a request is rejected before any work begins."""


class ExportInProgressError(ValidationError):
    """Raised when an export is started while another one is running."""


class ImageDecodeError(IconGeneratorError, ValueError):
    """Raised when a source image cannot be decoded."""


class OutputDirectoryError(IconGeneratorError, OSError):
    """Raised when the output folder for an export run cannot be created.

    Attributes:
        path: Folder that could not be created
        permission_denied: True when the failure was an access problem
    """

    def __init__(self, message: str, path: Optional[Path] = None, permission_denied: bool = False):
        super().__init__(message)
        self.path = path
        self.permission_denied = permission_denied


def is_permission_error(error: OSError) -> bool:
    """Return True for permission denied and read-only volume failures."""
    if isinstance(error, PermissionError):
        return True
    return getattr(error, "errno", None) in _PERMISSION_ERRNOS


def classify_filesystem_error(error: OSError, path: Union[str, Path]) -> OutputDirectoryError:
    """
    Turn a low-level OSError into a user-facing OutputDirectoryError.

    Permission problems get an actionable message asking for another
    folder; everything else is wrapped with the original reason.

    Args:
        error: The OSError raised by the file system call
        path: Path that was being created or written

    Returns:
        OutputDirectoryError describing the failure
    """
    path = Path(path)
    if is_permission_error(error):
        return OutputDirectoryError(
            f"Permission denied writing to '{path}'. Please choose a different folder.",
            path=path,
            permission_denied=True,
        )
    return OutputDirectoryError(
        f"Could not create output folder '{path}': {error}",
        path=path,
        permission_denied=False,
    )
