from pathlib import Path

import pytest

from sandboxfs.capabilities import Capabilities, Capability
from sandboxfs.errors import AccessDenied, CapabilityMismatch, NotReadable, NotRemovable, NotWritable
from sandboxfs.factory import FileSystemFactory, make_filesystem


def test_capabilities_constructors():
    assert Capabilities.all().enabled() == list(Capability)
    assert Capabilities.none().enabled() == []
    only = Capabilities.only(Capability.READABLE, "removable")
    assert only.readable and only.removable
    assert not only.writable
    assert only.supports(Capability.REMOVABLE)
    assert only.as_dict() == {
        "readable": True,
        "writable": False,
        "appendable": False,
        "truncatable": False,
        "removable": True,
    }


def test_capabilities_are_frozen():
    caps = Capabilities.all()
    with pytest.raises(AttributeError):
        caps.readable = False


@pytest.mark.parametrize(
    "maker, flag",
    [
        ("make_readable", "is_readable"),
        ("make_writable", "is_writable"),
        ("make_appendable", "is_appendable"),
        ("make_truncatable", "is_truncatable"),
        ("make_removable", "is_removable"),
    ],
)
def test_single_capability_factories(tmp_path: Path, maker, flag):
    fs = getattr(FileSystemFactory(), maker)(tmp_path)
    for query in ("is_readable", "is_writable", "is_appendable", "is_truncatable", "is_removable"):
        assert getattr(fs, query)() is (query == flag)


def test_read_only_filesystem_refuses_mutation(tmp_path: Path):
    (tmp_path / "f.txt").write_text("data")
    (tmp_path / "d").mkdir()
    fs = FileSystemFactory().make_readable(tmp_path)

    with fs.open_file("f.txt") as f:
        assert f.read() == b"data"
    assert fs.open_dir("d").is_dir()

    with pytest.raises(NotWritable):
        fs.create_file("new.txt")
    with pytest.raises(NotWritable):
        fs.create_new_dir("newdir")
    with pytest.raises(NotRemovable) as info:
        fs.remove_file("f.txt")
    assert isinstance(info.value, CapabilityMismatch)
    assert isinstance(info.value, PermissionError)
    assert (tmp_path / "f.txt").exists()
    assert not (tmp_path / "new.txt").exists()


def test_guard_runs_before_capability_check(tmp_path: Path):
    fs = FileSystemFactory().make_readable(tmp_path)
    with pytest.raises(AccessDenied):
        fs.create_file("../x")


def test_write_only_filesystem_cannot_open(tmp_path: Path):
    fs = FileSystemFactory().make_writable(tmp_path)
    with fs.create_file("w.txt") as f:
        f.write(b"abc")
    with pytest.raises(NotReadable):
        fs.open_file("w.txt")
    with pytest.raises(NotReadable):
        fs.open_dir(".")
    assert fs.metadata("w.txt").size == 3


def test_writable_without_truncatable_overwrites_in_place(tmp_path: Path):
    (tmp_path / "f.txt").write_bytes(b"0123456789")
    fs = make_filesystem(tmp_path, Capabilities.only(Capability.WRITABLE))
    with fs.create_file("f.txt") as f:
        f.write(b"ab")
    assert (tmp_path / "f.txt").read_bytes() == b"ab23456789"


def test_appendable_only_create_appends(tmp_path: Path):
    (tmp_path / "log.txt").write_bytes(b"one\n")
    fs = FileSystemFactory().make_appendable(tmp_path)
    with fs.create_file("log.txt") as f:
        f.write(b"two\n")
    assert (tmp_path / "log.txt").read_bytes() == b"one\ntwo\n"
    with pytest.raises(NotWritable):
        fs.create_dir("dir")


def test_create_new_ignores_truncatable(tmp_path: Path):
    fs = make_filesystem(tmp_path)
    with fs.create_new_file("n.txt") as f:
        f.write(b"fresh")
        f.seek(0)
        assert f.read() == b"fresh"


def test_no_capabilities(tmp_path: Path):
    fs = make_filesystem(tmp_path, Capabilities.none())
    assert not any(fs.capabilities.as_dict().values())
    # introspection queries are not capability gated
    assert fs.is_dir(".")
    with pytest.raises(NotReadable):
        fs.open_file("anything")
