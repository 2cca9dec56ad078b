from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from svddoc.layout.bit_spans import REGISTER_BITS, BitSpan, layout
from svddoc.svd.model import AccessMode, SvdField

ACCESS_TEXT: dict[AccessMode, str] = {
    AccessMode.READ_ONLY: "R",
    AccessMode.READ_WRITE: "RW",
    AccessMode.READ_WRITE_ONCE: "RWO",
    AccessMode.WRITE_ONCE: "WO",
    AccessMode.WRITE_ONLY: "W",
    AccessMode.UNSPECIFIED: "-",
}

NO_ACCESS = ACCESS_TEXT[AccessMode.UNSPECIFIED]


@dataclass(frozen=True)
class RenderRecord:
    label: str
    range_text: str
    width: int  # column span of the cell
    description: str
    access_text: str


def range_text(high: int, low: int) -> str:
    return f"{high}" if high == low else f"{high} - {low}"


def format_span(span: BitSpan) -> RenderRecord:
    f = span.field
    if f is None:
        return RenderRecord(
            label="",
            range_text=range_text(span.high, span.low),
            width=span.width,
            description="",
            access_text=NO_ACCESS,
        )
    return RenderRecord(
        label=f.name,
        range_text=range_text(span.high, span.low),
        width=span.width,
        description=f.description or "",
        access_text=ACCESS_TEXT[f.access],
    )


def format_field(f: SvdField) -> RenderRecord:
    return format_span(BitSpan(high=f.msb, low=f.bit_offset, field=f))


def format_fields(fields: Iterable[SvdField]) -> list[RenderRecord]:
    return [format_span(s) for s in layout(fields)]


def header_cells(fields: Iterable[SvdField]) -> list[str]:
    """One cell per bit, bit 31 first; a field's name sits at its middle bit."""
    by_bit = {f.bit_offset + f.bit_width // 2: f.name for f in fields}
    return [by_bit.get(bit, "") for bit in reversed(range(REGISTER_BITS))]
