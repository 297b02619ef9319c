# sandboxfs/guard.py
"""
Lexical containment check for sub-paths.

A sub-path must start with `.` or a normal segment and may be followed by
`.`, `..` and normal segments. Each normal segment descends one level, each
`..` climbs one; the path is contained when the level never ends below the
root. Nothing here touches the disk, so symlinks pointing out of the root
are not detected.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple
import logging
import os

from sandboxfs.errors import AccessDenied, PathLike

logger = logging.getLogger(__name__)


class Component(Enum):
    PREFIX = "prefix"
    ROOT_DIR = "root"
    CUR_DIR = "cur"
    PARENT_DIR = "parent"
    NORMAL = "normal"


def components(sub: PathLike, pathmod=os.path) -> List[Tuple[Component, str]]:
    """
    Split a path into typed components.
    Empty segments (repeated or trailing separators) are dropped, `.` is kept.
    `pathmod` selects the path rules (`posixpath` or `ntpath`).
    """
    raw = os.fspath(sub)
    out: List[Tuple[Component, str]] = []

    drive, rest = pathmod.splitdrive(raw)
    if drive:
        out.append((Component.PREFIX, drive))

    seps = pathmod.sep + (pathmod.altsep or "")
    if rest[:1] and rest[0] in seps:
        out.append((Component.ROOT_DIR, rest[0]))

    if pathmod.altsep:
        rest = rest.replace(pathmod.altsep, pathmod.sep)
    for part in rest.split(pathmod.sep):
        if not part:
            continue
        if part == pathmod.curdir:
            out.append((Component.CUR_DIR, part))
        elif part == pathmod.pardir:
            out.append((Component.PARENT_DIR, part))
        else:
            out.append((Component.NORMAL, part))
    return out


def depth_level(sub: PathLike, *, strict: bool = False, pathmod=os.path) -> Optional[int]:
    """
    Net depth of `sub` below the root, or None when the path is rejected.
    With `strict`, any intermediate climb above the root also rejects.
    """
    comps = components(sub, pathmod)
    if not comps:
        return None

    first = comps[0][0]
    if first is Component.CUR_DIR:
        level = 0
    elif first is Component.NORMAL:
        level = 1
    else:
        return None

    for kind, _ in comps[1:]:
        if kind is Component.CUR_DIR:
            continue
        elif kind is Component.PARENT_DIR:
            level -= 1
        elif kind is Component.NORMAL:
            level += 1
        else:
            return None
        if strict and level < 0:
            return None

    if level < 0:
        return None
    return level


def is_contained(sub: PathLike, *, strict: bool = False, pathmod=os.path) -> bool:
    return depth_level(sub, strict=strict, pathmod=pathmod) is not None


@dataclass(frozen=True)
class PathGuard:
    strict: bool = False

    def check(self, sub: PathLike) -> None:
        """Raise AccessDenied if `sub` is malformed or escapes the root."""
        if not is_contained(sub, strict=self.strict):
            logger.warning("guard rejected sub-path %r", os.fspath(sub))
            raise AccessDenied(sub)

    def allows(self, sub: PathLike) -> bool:
        return is_contained(sub, strict=self.strict)
