# sandboxfs/services/filesystem.py
from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Callable, Optional, TypeVar
import logging

from sandboxfs.backend import StorageBackend
from sandboxfs.capabilities import Capabilities
from sandboxfs.entity import Directory, File, Metadata
from sandboxfs.errors import CapabilityMismatch, PathLike, wrap_os_errors
from sandboxfs.guard import PathGuard
from sandboxfs.logging import log_fs_call
from sandboxfs.ops import (
    CreateDir,
    CreateFile,
    FileSystem,
    OpenDir,
    OpenFile,
    RemoveDir,
    RemoveFile,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SandboxFileSystem(FileSystem, OpenFile, OpenDir, CreateFile, CreateDir, RemoveFile, RemoveDir):
    """
    Sandbox all entity operations inside a fixed root.

    Every sub-path goes through the path guard before the backend sees it;
    OS errors coming back from the backend are re-raised as typed FsErrors.
    """

    def __init__(self, root: PathLike, backend: StorageBackend, guard: Optional[PathGuard] = None):
        self._root = Path(root)
        self._backend = backend
        self._guard = guard or PathGuard()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root={str(self._root)!r}, capabilities={self.capabilities!r})"

    @property
    def root(self) -> Path:
        return self._root

    @property
    def capabilities(self) -> Capabilities:
        return self._backend.capabilities

    @property
    def guard(self) -> PathGuard:
        return self._guard

    def _resolve_in_root(self, sub: PathLike) -> Path:
        self._guard.check(sub)
        return self._root / sub

    def _delegate(self, op: str, sub: PathLike, fn: Callable[[Path], T]) -> T:
        target = self._resolve_in_root(sub)
        log_fs_call(logger, op, target)
        try:
            with wrap_os_errors(target):
                return fn(target)
        except CapabilityMismatch:
            logger.info("%s refused by capabilities: %s", op, target)
            raise

    # ---- Introspection

    def metadata(self, sub: PathLike) -> Metadata:
        return self._delegate("metadata", sub, self._backend.metadata)

    def exists(self, sub: PathLike) -> bool:
        return self._query(sub, self._backend.exists)

    def is_file(self, sub: PathLike) -> bool:
        return self._query(sub, self._backend.is_file)

    def is_dir(self, sub: PathLike) -> bool:
        return self._query(sub, self._backend.is_dir)

    def _query(self, sub: PathLike, fn: Callable[[Path], bool]) -> bool:
        if not self._guard.allows(sub):
            return False
        try:
            return fn(self._root / sub)
        except OSError:
            return False

    # ---- Open

    def open_file(self, sub: PathLike) -> File:
        return self._delegate("open_file", sub, self._backend.open_file)

    def open_dir(self, sub: PathLike) -> Directory:
        return self._delegate("open_dir", sub, self._backend.open_dir)

    # ---- Create

    def create_file(self, sub: PathLike) -> File:
        return self._delegate("create_file", sub, self._backend.create_file)

    def create_new_file(self, sub: PathLike) -> File:
        return self._delegate("create_new_file", sub, partial(self._backend.create_file, new=True))

    def create_dir(self, sub: PathLike) -> Directory:
        return self._delegate("create_dir", sub, self._backend.create_dir)

    def create_new_dir(self, sub: PathLike) -> Directory:
        return self._delegate("create_new_dir", sub, partial(self._backend.create_dir, new=True))

    # ---- Remove

    def remove_file(self, sub: PathLike) -> None:
        self._delegate("remove_file", sub, self._backend.remove_file)

    def remove_dir(self, sub: PathLike) -> None:
        self._delegate("remove_dir", sub, self._backend.remove_dir)
