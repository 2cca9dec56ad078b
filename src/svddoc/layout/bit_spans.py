"""Partition a 32-bit register word into field and reserved bit spans.

Diagrams show every bit position, so bits that no field claims are collected
into reserved spans. A run of unclaimed bits always becomes one span, which is
what lets the renderer emit a single cell with the right column span.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from svddoc.svd.model import SvdField

REGISTER_BITS = 32
REGISTER_MSB = REGISTER_BITS - 1


class BitLayoutError(ValueError):
    """Raised for fields that overlap or do not fit into the register word."""


@dataclass(frozen=True)
class BitSpan:
    high: int
    low: int
    field: Optional[SvdField] = None  # None => reserved

    @property
    def width(self) -> int:
        return self.high - self.low + 1

    @property
    def reserved(self) -> bool:
        return self.field is None


def _check_field(f: SvdField) -> None:
    if f.bit_width < 1:
        raise BitLayoutError(f"field {f.name} has width {f.bit_width}")
    if f.bit_offset < 0 or f.msb > REGISTER_MSB:
        raise BitLayoutError(
            f"field {f.name} [{f.msb}:{f.bit_offset}] is outside bits [{REGISTER_MSB}:0]"
        )


def layout(fields: Iterable[SvdField]) -> list[BitSpan]:
    """Return spans covering bits 31..0 exactly once, highest bit first.

    Raises BitLayoutError when a field is out of range or overlaps another.
    """
    ordered = sorted(fields, key=lambda f: f.msb, reverse=True)
    for f in ordered:
        _check_field(f)

    spans: list[BitSpan] = []
    cursor = 0  # lowest bit not yet assigned
    prev: Optional[SvdField] = None
    for f in reversed(ordered):
        if f.bit_offset < cursor:
            raise BitLayoutError(f"field {f.name} overlaps {prev.name if prev else '?'}")
        if f.bit_offset > cursor:
            spans.append(BitSpan(high=f.bit_offset - 1, low=cursor))
        spans.append(BitSpan(high=f.msb, low=f.bit_offset, field=f))
        cursor = f.msb + 1
        prev = f

    if cursor <= REGISTER_MSB:
        spans.append(BitSpan(high=REGISTER_MSB, low=cursor))

    spans.reverse()
    return spans
