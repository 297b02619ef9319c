# sandboxfs/capabilities.py
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import List


class Capability(str, Enum):
    READABLE = "readable"
    WRITABLE = "writable"
    APPENDABLE = "appendable"
    TRUNCATABLE = "truncatable"
    REMOVABLE = "removable"


@dataclass(frozen=True)
class Capabilities:
    """
    The five capability flags a filesystem advertises.
    Fixed at construction; callers use them to pick which operations make sense.
    """
    readable: bool = False
    writable: bool = False
    appendable: bool = False
    truncatable: bool = False
    removable: bool = False

    @classmethod
    def all(cls) -> "Capabilities":
        return cls(True, True, True, True, True)

    @classmethod
    def none(cls) -> "Capabilities":
        return cls()

    @classmethod
    def only(cls, *caps: Capability) -> "Capabilities":
        return cls(**{Capability(c).value: True for c in caps})

    def supports(self, cap: Capability) -> bool:
        return getattr(self, Capability(cap).value)

    def enabled(self) -> List[Capability]:
        return [Capability(f.name) for f in fields(self) if getattr(self, f.name)]

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class Introspect:
    """
    Capability queries. Subclasses provide a `capabilities` attribute or property.
    """
    capabilities: Capabilities

    def is_readable(self) -> bool:
        return self.capabilities.readable

    def is_writable(self) -> bool:
        return self.capabilities.writable

    def is_appendable(self) -> bool:
        return self.capabilities.appendable

    def is_truncatable(self) -> bool:
        return self.capabilities.truncatable

    def is_removable(self) -> bool:
        return self.capabilities.removable
