# sandboxfs/entity.py
"""
Entities addressable inside a sandboxed filesystem.

Directories are not files here: every entity answers exactly one of
`is_file()` / `is_dir()` with True.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Union

from sandboxfs.errors import IterationError


class EntityType(str, Enum):
    FILE = "file"
    DIR = "dir"


class File(ABC):
    @abstractmethod
    def size(self) -> int:
        """
        Space the entity itself occupies, in bytes, even for directories.
        Some backends cannot give this a meaningful value.
        """

    @abstractmethod
    def is_file(self) -> bool: ...

    @abstractmethod
    def is_dir(self) -> bool: ...


class DirectoryEntry(File):
    """One entry produced while listing a directory."""

    @abstractmethod
    def path(self) -> Path:
        """Path relative to the directory whose `entries()` produced this entry."""


EntryResult = Union[DirectoryEntry, IterationError]


class Directory(File):
    """
    A directory handle. The aggregate queries list the directory each time
    they are called and may be expensive.
    """

    @abstractmethod
    def total_size(self) -> int:
        """Sum of the sizes of the entries in this directory, excluding itself."""

    @abstractmethod
    def count(self) -> int:
        """Number of entries in this directory, excluding itself."""

    @abstractmethod
    def entries(self) -> Iterator[EntryResult]:
        """
        Fresh single-pass iterator over the current contents.
        Items that could not be read are yielded as `IterationError`.
        """


@dataclass(frozen=True)
class Metadata:
    path: Path
    type: EntityType
    size: int

    def is_file(self) -> bool:
        return self.type is EntityType.FILE

    def is_dir(self) -> bool:
        return self.type is EntityType.DIR
