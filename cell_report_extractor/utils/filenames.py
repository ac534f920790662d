# cell_report_extractor/utils/filenames.py
from __future__ import annotations
from datetime import datetime
from pathlib import Path
import re

# e.g. G_COM1__Highstar (Black)100Ah__311218541155988_20260225104342#0#1_1_5
_SERIAL_RE = re.compile(r"__([A-Za-z0-9]+)_\d{14}#")
_STAMP_RE = re.compile(r"_(\d{14})#")
_CHANNEL_RE = re.compile(r"_\d{14}#(?:[^#]*#)*([^#]+)$")


def serial_from_name(fname: str) -> str | None:
    m = _SERIAL_RE.search(fname)
    return m.group(1) if m else None


def date_from_name(fname: str) -> str:
    m = _STAMP_RE.search(Path(fname).name)
    if not m:
        return ""
    try:
        stamp = datetime.strptime(m.group(1), "%Y%m%d%H%M%S")
    except ValueError:
        return ""
    return stamp.strftime("%Y-%m-%d %H:%M:%S")


def channel_from_name(fname: str) -> str:
    """Text after the last '#' of the '<timestamp>#...#<channel>' tail."""
    base = Path(fname).name
    if base.lower().endswith(".xlsx"):
        base = base[:-5]
    m = _CHANNEL_RE.search(base)
    return m.group(1).strip() if m else ""
