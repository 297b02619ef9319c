# sandboxfs/di.py
from dataclasses import dataclass
import logging

from sandboxfs.config import Settings
from sandboxfs.factory import FileSystemFactory
from sandboxfs.services.filesystem import SandboxFileSystem

logger = logging.getLogger(__name__)


@dataclass
class Container:
    settings: Settings
    filesystem: SandboxFileSystem


def build_container(settings: Settings | None = None) -> Container:
    s = settings or Settings()
    root = s.SANDBOX_ROOT.resolve()
    if s.SANDBOX_CREATE_ROOT:
        root.mkdir(parents=True, exist_ok=True)

    fs = FileSystemFactory.from_settings(s).make_with(root, s.capabilities())
    logger.info("sandbox filesystem at %s with %s", root, [c.value for c in fs.capabilities.enabled()])

    return Container(s, fs)
