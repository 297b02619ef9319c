# sandboxfs/services/local.py
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterator, Optional
import errno
import os
import shutil
import stat

from sandboxfs.backend import StorageBackend
from sandboxfs.capabilities import Capabilities
from sandboxfs.entity import Directory, DirectoryEntry, EntityType, EntryResult, File, Metadata
from sandboxfs.errors import (
    BackendIoError,
    IterationError,
    NotReadable,
    NotRemovable,
    NotWritable,
    wrap_os_errors,
)

_O_BINARY = getattr(os, "O_BINARY", 0)


def _entity_type(st: os.stat_result) -> EntityType:
    if stat.S_ISDIR(st.st_mode):
        return EntityType.DIR
    return EntityType.FILE


class LocalFile(File):
    """
    An open file on local disk. Supports the usual binary file methods and
    the context manager protocol.
    """

    def __init__(self, raw: BinaryIO, path: Path):
        self._raw = raw
        self.name = path

    def __repr__(self) -> str:
        return f"LocalFile({str(self.name)!r})"

    def __enter__(self) -> "LocalFile":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._raw.closed:
            raise BackendIoError(self.name, ValueError("I/O operation on closed file"))

    def _stat(self) -> os.stat_result:
        self._check_open()
        with wrap_os_errors(self.name):
            return os.fstat(self._raw.fileno())

    def size(self) -> int:
        self._check_open()
        # Flush so buffered writes show up in the size.
        with wrap_os_errors(self.name):
            self._raw.flush()
        return self._stat().st_size

    def is_file(self) -> bool:
        return _entity_type(self._stat()) is EntityType.FILE

    def is_dir(self) -> bool:
        return _entity_type(self._stat()) is EntityType.DIR

    def read(self, n: int = -1) -> bytes:
        with wrap_os_errors(self.name):
            return self._raw.read(n)

    def write(self, data: bytes) -> int:
        with wrap_os_errors(self.name):
            return self._raw.write(data)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        with wrap_os_errors(self.name):
            return self._raw.seek(offset, whence)

    def tell(self) -> int:
        return self._raw.tell()

    def flush(self) -> None:
        with wrap_os_errors(self.name):
            self._raw.flush()

    def close(self) -> None:
        self._raw.close()

    @property
    def closed(self) -> bool:
        return self._raw.closed


class LocalDirEntry(DirectoryEntry):
    """Directory entry with type and size captured when it was listed."""

    def __init__(self, name: str, st: os.stat_result):
        self._name = name
        self._type = _entity_type(st)
        self._size = st.st_size

    def __repr__(self) -> str:
        return f"LocalDirEntry({self._name!r}, {self._type.value})"

    def path(self) -> Path:
        return Path(self._name)

    def size(self) -> int:
        return self._size

    def is_file(self) -> bool:
        return self._type is EntityType.FILE

    def is_dir(self) -> bool:
        return self._type is EntityType.DIR


def _iter_entries(path: Path) -> Iterator[EntryResult]:
    try:
        it = os.scandir(path)
    except OSError as exc:
        yield IterationError(path, exc)
        return
    with it:
        while True:
            try:
                entry = next(it)
            except StopIteration:
                return
            except OSError as exc:
                # The listing itself broke; nothing more can be read from it.
                yield IterationError(path, exc)
                return
            try:
                yield LocalDirEntry(entry.name, entry.stat(follow_symlinks=False))
            except OSError as exc:
                yield IterationError(Path(entry.path), exc)


class LocalDirectory(Directory):
    def __init__(self, path: Path):
        self.name = path

    def __repr__(self) -> str:
        return f"LocalDirectory({str(self.name)!r})"

    def _stat(self) -> os.stat_result:
        with wrap_os_errors(self.name):
            return os.stat(self.name)

    def size(self) -> int:
        return self._stat().st_size

    def is_file(self) -> bool:
        return _entity_type(self._stat()) is EntityType.FILE

    def is_dir(self) -> bool:
        return _entity_type(self._stat()) is EntityType.DIR

    def total_size(self) -> int:
        with wrap_os_errors(self.name), os.scandir(self.name) as it:
            return sum(entry.stat(follow_symlinks=False).st_size for entry in it)

    def count(self) -> int:
        with wrap_os_errors(self.name), os.scandir(self.name) as it:
            return sum(1 for _ in it)

    def entries(self) -> Iterator[EntryResult]:
        # The listing is opened on first iteration; check the directory now.
        if not stat.S_ISDIR(self._stat().st_mode):
            with wrap_os_errors(self.name):
                raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(self.name))
        return _iter_entries(self.name)


class LocalDiskBackend(StorageBackend):
    """
    Local disk storage. Honours its capability set when choosing how to
    open files and refuses operations the set does not allow.
    """

    def __init__(self, capabilities: Optional[Capabilities] = None):
        self._capabilities = capabilities if capabilities is not None else Capabilities.all()

    @property
    def capabilities(self) -> Capabilities:
        return self._capabilities

    # ---- Introspection

    def metadata(self, path: Path) -> Metadata:
        st = os.stat(path)
        return Metadata(path, _entity_type(st), st.st_size)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    # ---- Open

    def open_file(self, path: Path) -> File:
        if not self._capabilities.readable:
            raise NotReadable(path)
        return LocalFile(open(path, "rb"), path)

    def open_dir(self, path: Path) -> Directory:
        if not self._capabilities.readable:
            raise NotReadable(path)
        if not stat.S_ISDIR(os.stat(path).st_mode):
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(path))
        return LocalDirectory(path)

    # ---- Create

    def _write_flags(self, new: bool):
        caps = self._capabilities
        if not (caps.writable or caps.appendable):
            return None
        flags = os.O_CREAT | _O_BINARY
        flags |= os.O_RDWR if caps.readable else os.O_WRONLY
        append = caps.appendable and not caps.writable
        if append:
            flags |= os.O_APPEND
        if new:
            flags |= os.O_EXCL
        elif caps.writable and caps.truncatable:
            flags |= os.O_TRUNC

        if caps.readable:
            mode = "a+b" if append else "r+b"
        else:
            mode = "ab" if append else "wb"
        return flags, mode

    def create_file(self, path: Path, *, new: bool = False) -> File:
        spec = self._write_flags(new)
        if spec is None:
            raise NotWritable(path)
        flags, mode = spec
        fd = os.open(path, flags, 0o666)
        try:
            raw = open(fd, mode)
        except BaseException:
            os.close(fd)
            raise
        return LocalFile(raw, path)

    def create_dir(self, path: Path, *, new: bool = False) -> Directory:
        if not self._capabilities.writable:
            raise NotWritable(path)
        if new:
            return self._create_new_dir(path)
        else:
            path.mkdir(parents=True, exist_ok=True)
        return LocalDirectory(path)

    def _create_new_dir(self, path: Path) -> Directory:
        # Collapse ".." first so "ghost/.." names the existing parent, not a new "ghost".
        path = Path(os.path.normpath(path))
        missing = []
        parent = path.parent
        while not parent.exists() and parent != parent.parent:
            missing.append(parent)
            parent = parent.parent
        created = []
        try:
            for d in reversed(missing):
                d.mkdir()
                created.append(d)
            path.mkdir()
        except OSError:
            # Leave no parents behind when the leaf could not be made.
            for d in reversed(created):
                try:
                    d.rmdir()
                except OSError:
                    break
            raise
        return LocalDirectory(path)

    # ---- Remove

    def remove_file(self, path: Path) -> None:
        if not self._capabilities.removable:
            raise NotRemovable(path)
        os.remove(path)

    def remove_dir(self, path: Path) -> None:
        if not self._capabilities.removable:
            raise NotRemovable(path)
        if not stat.S_ISDIR(os.lstat(path).st_mode):
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(path))
        shutil.rmtree(path)
