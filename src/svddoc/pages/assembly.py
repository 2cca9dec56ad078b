from __future__ import annotations

from svddoc.layout.formatter import format_field, format_fields, header_cells
from svddoc.pages.context import (
    IndexEntry,
    IndexPage,
    InterruptEntry,
    PeripheralPage,
    RegisterEntry,
    resolve_register_name,
)
from svddoc.svd.model import SvdDevice, SvdInterrupt, SvdPeripheral, SvdRegister
from svddoc.utils.hexfmt import address_text, offset_text


def build_interrupt_entry(irq: SvdInterrupt) -> InterruptEntry:
    return InterruptEntry(name=irq.name, value=str(irq.value), description=irq.description or "")


def build_register_entry(base_address: int, reg: SvdRegister) -> RegisterEntry:
    return RegisterEntry(
        name=resolve_register_name(reg),
        offset=offset_text(reg.offset),
        address=address_text(base_address + reg.offset),
        description=reg.description or "",
        header=tuple(header_cells(reg.fields)),
        records=tuple(format_fields(reg.fields)),
        fields=tuple(format_field(f) for f in reg.fields),
    )


def build_peripheral_page(p: SvdPeripheral) -> PeripheralPage:
    return PeripheralPage(
        name=p.name,
        base_address=address_text(p.base_address),
        description=p.description or "",
        interrupts=tuple(build_interrupt_entry(i) for i in p.interrupts),
        registers=tuple(build_register_entry(p.base_address, r) for r in p.registers),
    )


def build_index_page(device: SvdDevice) -> IndexPage:
    return IndexPage(
        device=device.name,
        peripherals=tuple(IndexEntry(name=p.name, description=p.description or "") for p in device.peripherals),
    )
