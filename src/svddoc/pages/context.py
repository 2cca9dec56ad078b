from __future__ import annotations

from dataclasses import dataclass

from svddoc.layout.formatter import RenderRecord
from svddoc.svd.model import SvdRegister

ARRAY_PLACEHOLDER = "%s"


def resolve_register_name(reg: SvdRegister, placeholder: str = ARRAY_PLACEHOLDER) -> str:
    """Expand the array placeholder in a register name.

    The range text uses the raw dimension count, so a four-element array
    CH%s_CTRL becomes CH<0..4>_CTRL.
    """
    if reg.array_count <= 0:
        return reg.name
    return reg.name.replace(placeholder, f"<0..{reg.array_count}>")


@dataclass(frozen=True)
class InterruptEntry:
    name: str
    value: str
    description: str


@dataclass(frozen=True)
class RegisterEntry:
    name: str
    offset: str
    address: str
    description: str
    header: tuple[str, ...]
    records: tuple[RenderRecord, ...]  # diagram cells, bit 31 first
    fields: tuple[RenderRecord, ...] = ()  # declaration order


@dataclass(frozen=True)
class PeripheralPage:
    name: str
    base_address: str
    description: str
    interrupts: tuple[InterruptEntry, ...]
    registers: tuple[RegisterEntry, ...]


@dataclass(frozen=True)
class IndexEntry:
    name: str
    description: str


@dataclass(frozen=True)
class IndexPage:
    device: str
    peripherals: tuple[IndexEntry, ...]
