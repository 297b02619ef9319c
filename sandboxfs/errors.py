# sandboxfs/errors.py
"""
Typed errors raised by sandboxed filesystem operations.

Each kind also derives from the matching built-in exception, so callers can
write `except PermissionError` or `except FileNotFoundError` as they would
against the plain OS layer.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Union
import os

PathLike = Union[str, "os.PathLike[str]"]


class FsError(Exception):
    """
    Base class for all sandbox filesystem errors.

    Attributes:
        message: human readable description
        path: the path the failure refers to (sub-path or resolved path)
        error_code: numeric code for programmatic handling
    """
    error_code = 4000

    def __init__(self, message: str, path: Optional[PathLike] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = os.fspath(path) if path is not None else None

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path is not None:
            base = f"{base} (path={self.path})"
        return base


class AccessDenied(FsError, PermissionError):
    """The path guard rejected the sub-path: it leaves the root or is malformed."""
    error_code = 4003

    def __init__(self, path: PathLike) -> None:
        super().__init__("Path escapes sandbox root", path)


class CapabilityMismatch(FsError, PermissionError):
    """The filesystem lacks the capability the operation needs."""
    error_code = 4010
    capability = ""

    def __init__(self, path: PathLike) -> None:
        super().__init__(f"Filesystem is not {self.capability}", path)


class NotReadable(CapabilityMismatch):
    error_code = 4011
    capability = "readable"


class NotWritable(CapabilityMismatch):
    error_code = 4012
    capability = "writable"


class NotRemovable(CapabilityMismatch):
    error_code = 4013
    capability = "removable"


class NotFound(FsError, FileNotFoundError):
    error_code = 4004

    def __init__(self, path: PathLike) -> None:
        super().__init__("Entity not found", path)


class AlreadyExists(FsError, FileExistsError):
    error_code = 4009

    def __init__(self, path: PathLike) -> None:
        super().__init__("Entity already exists", path)


class BackendIoError(FsError, OSError):
    """Opaque failure from the storage layer. The original error is kept in `cause`."""
    error_code = 4500

    def __init__(self, path: PathLike, cause: Optional[BaseException] = None) -> None:
        detail = cause.strerror if isinstance(cause, OSError) and cause.strerror else str(cause or "I/O error")
        super().__init__(detail, path)
        self.cause = cause


class IterationError(FsError):
    """
    A single directory entry could not be produced. Yielded in place of the
    entry by `Directory.entries()`; the rest of the listing continues.
    """
    error_code = 4600

    def __init__(self, path: PathLike, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Failed to read directory entry: {cause}", path)
        self.cause = cause


def translate_os_error(err: OSError, path: PathLike) -> FsError:
    if isinstance(err, FsError):
        return err
    if isinstance(err, FileNotFoundError):
        return NotFound(path)
    if isinstance(err, FileExistsError):
        return AlreadyExists(path)
    return BackendIoError(path, err)


@contextmanager
def wrap_os_errors(path: PathLike) -> Iterator[None]:
    """Re-raise OS errors from the block as typed filesystem errors."""
    try:
        yield
    except FsError:
        raise
    except OSError as exc:
        raise translate_os_error(exc, path) from exc
