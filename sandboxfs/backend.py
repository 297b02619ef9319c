# sandboxfs/backend.py
"""
Storage backend abstraction.

Separates the I/O mechanism (local disk, ...) from policy (path guard,
error translation) which lives in SandboxFileSystem.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from sandboxfs.capabilities import Capabilities
from sandboxfs.entity import Directory, File, Metadata


class StorageBackend(ABC):
    """
    Performs entity access for already guarded, absolute paths.

    Implementations raise OSError for storage failures and a
    CapabilityMismatch subclass when asked for something their
    capability set does not allow. They must keep files and
    directories mutually exclusive and report sizes in bytes.
    """

    @property
    @abstractmethod
    def capabilities(self) -> Capabilities: ...

    @abstractmethod
    def metadata(self, path: Path) -> Metadata: ...

    @abstractmethod
    def exists(self, path: Path) -> bool: ...

    @abstractmethod
    def is_file(self, path: Path) -> bool: ...

    @abstractmethod
    def is_dir(self, path: Path) -> bool: ...

    @abstractmethod
    def open_file(self, path: Path) -> File: ...

    @abstractmethod
    def open_dir(self, path: Path) -> Directory: ...

    @abstractmethod
    def create_file(self, path: Path, *, new: bool = False) -> File:
        """Create or open a file; with `new`, fail if it already exists."""

    @abstractmethod
    def create_dir(self, path: Path, *, new: bool = False) -> Directory:
        """Create a directory tree or open it; with `new`, fail if the leaf exists."""

    @abstractmethod
    def remove_file(self, path: Path) -> None: ...

    @abstractmethod
    def remove_dir(self, path: Path) -> None:
        """Remove recursively."""
