from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from svddoc.layout.bit_spans import REGISTER_BITS, REGISTER_MSB
from svddoc.svd.model import (
    Array,
    SINGLE,
    AccessMode,
    RegisterDim,
    SvdDevice,
    SvdField,
    SvdInterrupt,
    SvdPeripheral,
    SvdRegister,
)
from svddoc.utils.logger import get_logger

log = get_logger(__name__)

MAX_DERIVE_DEPTH = 8

_BIT_RANGE = re.compile(r"\[\s*(\w+)\s*:\s*(\w+)\s*\]")


class SvdParseError(ValueError):
    """Raised when an SVD description cannot be turned into a device model."""


def _t(node: Optional[ET.Element], tag: str) -> Optional[str]:
    if node is None:
        return None
    e = node.find(tag)
    return e.text.strip() if (e is not None and e.text) else None


def _desc(node: Optional[ET.Element]) -> Optional[str]:
    text = _t(node, "description")
    if text is None:
        return None
    return " ".join(text.split())


def _int(s: Optional[str], default: Optional[int] = None, what: str = "value") -> Optional[int]:
    if s is None:
        return default
    s = s.strip()
    if s.startswith("#"):
        # SVD binary notation, e.g. #0101
        try:
            return int(s[1:], 2)
        except ValueError:
            raise SvdParseError(f"bad {what}: {s!r}") from None
    try:
        return int(s, 0)
    except ValueError:
        pass
    # some SVDs use hex without 0x, others pad decimals with leading zeros
    try:
        return int(s, 16) if not s.isdigit() else int(s, 10)
    except ValueError:
        raise SvdParseError(f"bad {what}: {s!r}") from None


def _access(node: ET.Element, owner: str) -> AccessMode:
    text = _t(node, "access")
    try:
        return AccessMode.from_svd(text)
    except ValueError:
        raise SvdParseError(f"unknown access {text!r} in {owner}") from None


def parse_field(f: ET.Element, reg_name: str) -> Optional[SvdField]:
    fname = _t(f, "name")
    if not fname:
        log.warning("Skipping unnamed field in register %s", reg_name)
        return None
    where = f"{reg_name}.{fname}"

    bit_range = _t(f, "bitRange")
    if bit_range is not None:
        m = _BIT_RANGE.fullmatch(bit_range)
        if m is None:
            raise SvdParseError(f"bad bitRange {bit_range!r} in {where}")
        msb = _int(m.group(1), what=f"{where} bitRange")
        lsb = _int(m.group(2), what=f"{where} bitRange")
        bo, bw = lsb, msb - lsb + 1
    elif _t(f, "lsb") is not None and _t(f, "msb") is not None:
        lsb = _int(_t(f, "lsb"), what=f"{where} lsb")
        msb = _int(_t(f, "msb"), what=f"{where} msb")
        bo, bw = lsb, msb - lsb + 1
    else:
        bo = _int(_t(f, "bitOffset"), None, what=f"{where} bitOffset")
        if bo is None:
            raise SvdParseError(f"field {where} has no bit position")
        bw = _int(_t(f, "bitWidth"), 1, what=f"{where} bitWidth")

    return SvdField(
        name=fname,
        bit_offset=bo,
        bit_width=bw,
        description=_desc(f),
        access=_access(f, where),
    )


def _dim(r: ET.Element, rname: str) -> RegisterDim:
    dim = _int(_t(r, "dim"), None, what=f"{rname} dim")
    if dim is None:
        return SINGLE
    return Array(
        count=dim,
        increment=_int(_t(r, "dimIncrement"), 4, what=f"{rname} dimIncrement"),
        index=_t(r, "dimIndex"),
    )


def parse_register(r: ET.Element, periph_name: str) -> Optional[SvdRegister]:
    rname = _t(r, "name")
    if not rname:
        log.warning("Skipping unnamed register in peripheral %s", periph_name)
        return None
    where = f"{periph_name}.{rname}"

    offset = _int(_t(r, "addressOffset"), None, what=f"{where} addressOffset")
    if offset is None:
        raise SvdParseError(f"register {where} has no addressOffset")
    size_bits = _int(_t(r, "size"), 32, what=f"{where} size")
    if size_bits != REGISTER_BITS:
        log.warning("Register %s is %d bits wide, diagram shows bits 0..%d", where, size_bits, REGISTER_MSB)

    fields: list[SvdField] = []
    fnode = r.find("fields")
    if fnode is not None:
        for f in fnode.findall("field"):
            fld = parse_field(f, where)
            if fld is None:
                continue
            if size_bits > REGISTER_BITS and fld.msb > REGISTER_MSB:
                # wide registers: only the low word is drawn
                log.warning(
                    "Dropping field %s.%s [%d:%d], above bit %d", where, fld.name, fld.msb, fld.bit_offset, REGISTER_MSB
                )
                continue
            fields.append(fld)

    return SvdRegister(
        name=rname,
        offset=offset,
        description=_desc(r),
        size_bits=size_bits,
        dim=_dim(r, where),
        fields=tuple(fields),
    )


def parse_registers(regs_node: Optional[ET.Element], periph_name: str) -> tuple[SvdRegister, ...]:
    if regs_node is None:
        return ()
    regs: list[SvdRegister] = []
    for r in regs_node.findall("register"):
        reg = parse_register(r, periph_name)
        if reg is not None:
            regs.append(reg)
    n_clusters = len(regs_node.findall("cluster"))
    if n_clusters:
        log.debug("Peripheral %s: skipping %d register cluster(s)", periph_name, n_clusters)
    return tuple(regs)


def parse_interrupts(p: ET.Element, periph_name: str) -> tuple[SvdInterrupt, ...]:
    irqs: list[SvdInterrupt] = []
    for i in p.findall("interrupt"):
        iname = _t(i, "name")
        if not iname:
            log.warning("Skipping unnamed interrupt in peripheral %s", periph_name)
            continue
        value = _int(_t(i, "value"), None, what=f"{periph_name}.{iname} value")
        if value is None:
            raise SvdParseError(f"interrupt {periph_name}.{iname} has no value")
        irqs.append(SvdInterrupt(name=iname, value=value, description=_desc(i)))
    return tuple(irqs)


def parse_device(root: ET.Element, default_name: str = "device") -> SvdDevice:
    dev_name = _t(root, "name") or default_name
    perips_node = root.find("peripherals")

    if perips_node is None:
        log.warning("No <peripherals> found in SVD device %s", dev_name)
        return SvdDevice(name=dev_name, peripherals=())

    # ---- first pass: capture XML + basic fields
    raw: dict[str, dict] = {}

    for p in perips_node.findall("peripheral"):
        pname = _t(p, "name")
        if not pname:
            log.warning("Skipping unnamed peripheral in device %s", dev_name)
            continue

        base = _int(_t(p, "baseAddress"), None, what=f"{pname} baseAddress")
        if base is None:
            raise SvdParseError(f"peripheral {pname} has no baseAddress")

        raw[pname] = {
            "name": pname,
            "derivedFrom": p.get("derivedFrom"),
            "base": base,
            "description": _desc(p),
            "interrupts": parse_interrupts(p, pname),
            "regs_node": p.find("registers"),
        }

    # ---- resolve derivedFrom by copying missing pieces
    resolved: dict[str, SvdPeripheral] = {}

    def resolve(name: str, depth: int = 0) -> SvdPeripheral:
        if name in resolved:
            return resolved[name]
        if depth > MAX_DERIVE_DEPTH:
            raise SvdParseError(f"derivedFrom chain too deep at {name}")

        entry = raw.get(name)
        if entry is None:
            raise SvdParseError(f"derivedFrom names unknown peripheral: {name}")

        parent_name = entry["derivedFrom"]
        parent: Optional[SvdPeripheral] = None
        if parent_name:
            parent = resolve(parent_name, depth + 1)

        description = entry["description"]
        regs = parse_registers(entry["regs_node"], name)

        if parent is not None:
            if description is None:
                description = parent.description
            if not regs:
                regs = parent.registers

        periph = SvdPeripheral(
            name=entry["name"],
            base_address=entry["base"],
            description=description,
            interrupts=entry["interrupts"],
            registers=regs,
        )
        resolved[name] = periph
        return periph

    peripherals = [resolve(n) for n in raw.keys()]
    log.info("Loaded SVD device=%s peripherals=%d", dev_name, len(peripherals))
    return SvdDevice(name=dev_name, peripherals=tuple(peripherals))


def parse_svd(text: str, default_name: str = "device") -> SvdDevice:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise SvdParseError(f"malformed SVD: {e}") from e
    return parse_device(root, default_name)


def load_svd(path: Path) -> SvdDevice:
    try:
        tree = ET.parse(path)
    except ET.ParseError as e:
        raise SvdParseError(f"malformed SVD {path}: {e}") from e
    return parse_device(tree.getroot(), path.stem)
