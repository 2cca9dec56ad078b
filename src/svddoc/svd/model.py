from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union


class AccessMode(enum.Enum):
    READ_ONLY = "read-only"
    READ_WRITE = "read-write"
    READ_WRITE_ONCE = "read-writeOnce"
    WRITE_ONCE = "writeOnce"
    WRITE_ONLY = "write-only"
    UNSPECIFIED = ""

    @classmethod
    def from_svd(cls, text: Optional[str]) -> "AccessMode":
        """Map an SVD <access> value; a missing value is UNSPECIFIED."""
        if not text:
            return cls.UNSPECIFIED
        return cls(text.strip())


@dataclass(frozen=True)
class SvdField:
    name: str
    bit_offset: int
    bit_width: int
    description: Optional[str] = None
    access: AccessMode = AccessMode.UNSPECIFIED

    @property
    def msb(self) -> int:
        return self.bit_offset + self.bit_width - 1


@dataclass(frozen=True)
class Single:
    count: int = 0


@dataclass(frozen=True)
class Array:
    count: int
    increment: int = 4
    index: Optional[str] = None  # raw <dimIndex> text


RegisterDim = Union[Single, Array]

SINGLE = Single()


@dataclass(frozen=True)
class SvdRegister:
    name: str
    offset: int
    description: Optional[str] = None
    size_bits: int = 32
    dim: RegisterDim = SINGLE
    fields: tuple[SvdField, ...] = ()

    @property
    def array_count(self) -> int:
        # 0 for plain registers
        return self.dim.count


@dataclass(frozen=True)
class SvdInterrupt:
    name: str
    value: int
    description: Optional[str] = None


@dataclass(frozen=True)
class SvdPeripheral:
    name: str
    base_address: int
    description: Optional[str] = None
    interrupts: tuple[SvdInterrupt, ...] = ()
    registers: tuple[SvdRegister, ...] = ()


@dataclass(frozen=True)
class SvdDevice:
    name: str
    peripherals: tuple[SvdPeripheral, ...] = ()
