import ntpath
import posixpath
from pathlib import PurePosixPath

import pytest

from sandboxfs.errors import AccessDenied
from sandboxfs.guard import Component, PathGuard, components, depth_level, is_contained


@pytest.mark.parametrize(
    "sub, level",
    [
        (".", 0),
        ("./.", 0),
        ("a", 1),
        ("a/b", 2),
        ("a/../b", 1),
        ("./a/..", 0),
        ("a//b/", 2),
        ("a/./b", 2),
    ],
)
def test_accepted_paths_report_level(sub, level):
    assert depth_level(sub, pathmod=posixpath) == level
    assert is_contained(sub, pathmod=posixpath)


@pytest.mark.parametrize(
    "sub",
    ["..", "./..", "./a/../..", "a/../..", "/etc/passwd", "", "../a", "a/b/../../.."],
)
def test_rejected_paths(sub):
    assert depth_level(sub, pathmod=posixpath) is None
    assert not is_contained(sub, pathmod=posixpath)


def test_final_level_only_by_default():
    # climbs to -1 after the second "..", ends at level 2
    sub = "a/../../b/c/d"
    assert depth_level(sub, pathmod=posixpath) == 2
    assert depth_level(sub, strict=True, pathmod=posixpath) is None


def test_components_keep_current_dir_markers():
    assert components("./a/./..", posixpath) == [
        (Component.CUR_DIR, "."),
        (Component.NORMAL, "a"),
        (Component.CUR_DIR, "."),
        (Component.PARENT_DIR, ".."),
    ]


def test_components_mark_absolute_root():
    comps = components("/a", posixpath)
    assert comps[0] == (Component.ROOT_DIR, "/")
    assert comps[1] == (Component.NORMAL, "a")


@pytest.mark.parametrize("sub", ["C:foo", "C:\\foo", "\\\\server\\share\\x", "\\foo"])
def test_windows_prefix_and_root_rejected(sub):
    assert not is_contained(sub, pathmod=ntpath)


def test_windows_relative_path_accepted():
    assert depth_level("a\\b/c", pathmod=ntpath) == 3


def test_guard_accepts_path_objects():
    assert PathGuard().allows(PurePosixPath("a/b"))


def test_guard_raises_access_denied_with_path():
    with pytest.raises(AccessDenied) as info:
        PathGuard().check("./a/../..")
    assert info.value.path == "./a/../.."
    assert isinstance(info.value, PermissionError)


def test_strict_guard_rejects_intermediate_escape():
    guard = PathGuard(strict=True)
    assert guard.allows("a/../b")
    with pytest.raises(AccessDenied):
        guard.check("a/../../b")
