from pathlib import Path

import pytest

from sandboxfs.config import Settings
from sandboxfs.di import build_container
from sandboxfs.errors import AccessDenied, NotRemovable


def test_settings_read_capabilities_from_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("SANDBOX_ROOT", str(tmp_path / "box"))
    monkeypatch.setenv("FS_REMOVABLE", "false")
    monkeypatch.setenv("GUARD_STRICT", "true")
    s = Settings()
    assert s.SANDBOX_ROOT == tmp_path / "box"
    caps = s.capabilities()
    assert caps.readable and caps.writable
    assert not caps.removable
    assert s.GUARD_STRICT is True


def test_build_container_creates_root(tmp_path: Path):
    root = tmp_path / "sandbox"
    c = build_container(Settings(SANDBOX_ROOT=root))
    assert root.is_dir()
    assert c.filesystem.root == root.resolve()
    assert c.filesystem.is_removable()


def test_build_container_without_root_creation(tmp_path: Path):
    root = tmp_path / "absent"
    c = build_container(Settings(SANDBOX_ROOT=root, SANDBOX_CREATE_ROOT=False))
    assert not root.exists()
    assert not c.filesystem.exists(".")


def test_container_filesystem_follows_settings(tmp_path: Path):
    c = build_container(Settings(SANDBOX_ROOT=tmp_path, FS_REMOVABLE=False, GUARD_STRICT=True))
    c.filesystem.create_file("keep.txt").close()
    with pytest.raises(NotRemovable):
        c.filesystem.remove_file("keep.txt")
    with pytest.raises(AccessDenied):
        c.filesystem.create_dir("a/../../b")
