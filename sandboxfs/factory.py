# sandboxfs/factory.py
"""
Builds sandboxed filesystems bound to a root directory.

    from sandboxfs.factory import FileSystemFactory

    fs = FileSystemFactory().make("./data")
    fs.create_dir("notes")
    with fs.create_file("notes/today.txt") as f:
        f.write(b"hello")
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, TYPE_CHECKING

from sandboxfs.backend import StorageBackend
from sandboxfs.capabilities import Capabilities, Capability
from sandboxfs.errors import PathLike
from sandboxfs.guard import PathGuard
from sandboxfs.services.filesystem import SandboxFileSystem
from sandboxfs.services.local import LocalDiskBackend

if TYPE_CHECKING:
    from sandboxfs.config import Settings


class FileSystemFactory:
    """
    `backend_cls` is called with the requested Capabilities and must return
    a StorageBackend honouring them.
    """

    def __init__(
        self,
        backend_cls: Callable[[Capabilities], StorageBackend] = LocalDiskBackend,
        *,
        strict_guard: bool = False,
    ):
        self.backend_cls = backend_cls
        self.strict_guard = strict_guard

    @classmethod
    def from_settings(cls, settings: "Settings") -> "FileSystemFactory":
        return cls(strict_guard=settings.GUARD_STRICT)

    def make(self, root: PathLike) -> SandboxFileSystem:
        """Filesystem with every capability enabled."""
        return self.make_with(root, Capabilities.all())

    def make_with(self, root: PathLike, capabilities: Capabilities) -> SandboxFileSystem:
        backend = self.backend_cls(capabilities)
        return SandboxFileSystem(Path(root), backend, PathGuard(strict=self.strict_guard))

    def make_readable(self, root: PathLike) -> SandboxFileSystem:
        return self.make_with(root, Capabilities.only(Capability.READABLE))

    def make_writable(self, root: PathLike) -> SandboxFileSystem:
        return self.make_with(root, Capabilities.only(Capability.WRITABLE))

    def make_appendable(self, root: PathLike) -> SandboxFileSystem:
        return self.make_with(root, Capabilities.only(Capability.APPENDABLE))

    def make_truncatable(self, root: PathLike) -> SandboxFileSystem:
        return self.make_with(root, Capabilities.only(Capability.TRUNCATABLE))

    def make_removable(self, root: PathLike) -> SandboxFileSystem:
        return self.make_with(root, Capabilities.only(Capability.REMOVABLE))


def make_filesystem(root: PathLike, capabilities: Optional[Capabilities] = None) -> SandboxFileSystem:
    factory = FileSystemFactory()
    if capabilities is None:
        return factory.make(root)
    return factory.make_with(root, capabilities)
