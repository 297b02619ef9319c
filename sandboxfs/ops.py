# sandboxfs/ops.py
"""
Operation interfaces a filesystem may adopt independently:

- open:   OpenFile, OpenDir
- create: CreateFile, CreateDir
- remove: RemoveFile, RemoveDir

Every `sub` argument is a sub-path interpreted relative to the filesystem root.
The capability named on each method documents what the filesystem must
advertise for the call to be meaningful; it is not checked here.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from sandboxfs.capabilities import Introspect
from sandboxfs.entity import Directory, File, Metadata
from sandboxfs.errors import PathLike


class FileSystem(Introspect, ABC):
    @property
    @abstractmethod
    def root(self) -> Path: ...

    @abstractmethod
    def metadata(self, sub: PathLike) -> Metadata: ...

    @abstractmethod
    def exists(self, sub: PathLike) -> bool: ...

    @abstractmethod
    def is_file(self, sub: PathLike) -> bool:
        """A filesystem holding only directories always returns False."""

    @abstractmethod
    def is_dir(self, sub: PathLike) -> bool:
        """A filesystem holding only files always returns False."""


class OpenFile(ABC):
    @abstractmethod
    def open_file(self, sub: PathLike) -> File:
        """Open an existing file. Readable."""


class OpenDir(ABC):
    @abstractmethod
    def open_dir(self, sub: PathLike) -> Directory:
        """Open an existing directory. Readable."""


class CreateFile(ABC):
    @abstractmethod
    def create_file(self, sub: PathLike) -> File:
        """Create a file, or open it if it already exists. Writable or Appendable."""

    @abstractmethod
    def create_new_file(self, sub: PathLike) -> File:
        """
        Create a file, failing with AlreadyExists if it is there.
        Writable or Appendable; Truncatable is ignored. Not guaranteed atomic.
        """


class CreateDir(ABC):
    @abstractmethod
    def create_dir(self, sub: PathLike) -> Directory:
        """Create a directory and missing parents, or open it if present. Writable."""

    @abstractmethod
    def create_new_dir(self, sub: PathLike) -> Directory:
        """Create a directory, failing with AlreadyExists if it is there. Writable."""


class RemoveFile(ABC):
    @abstractmethod
    def remove_file(self, sub: PathLike) -> None: ...


class RemoveDir(ABC):
    @abstractmethod
    def remove_dir(self, sub: PathLike) -> None:
        """Remove a directory and everything beneath it."""
