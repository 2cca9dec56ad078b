from __future__ import annotations


def hex_text(value: int, digits: int) -> str:
    """Lowercase, zero-padded hex with a 0x prefix; wider values are not truncated."""
    return f"0x{value:0{digits}x}"


def address_text(addr: int) -> str:
    return hex_text(addr, 8)


def offset_text(off: int) -> str:
    return hex_text(off, 4)
