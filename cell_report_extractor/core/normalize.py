# cell_report_extractor/core/normalize.py
from __future__ import annotations
import math

from .model import CellValue


def to_float(cell: CellValue | None) -> float | None:
    """Number cells pass through; text cells count only if the whole text is a float."""
    if cell is None:
        return None
    if cell.kind == "number":
        v = float(cell.value)
    elif cell.kind == "text":
        try:
            v = float(str(cell.value).strip())
        except ValueError:
            return None
    else:
        return None
    return v if math.isfinite(v) else None


def to_str(cell: CellValue | None) -> str | None:
    """Trimmed text of a text cell; numbers and blanks are not labels."""
    if cell is None or cell.kind != "text":
        return None
    s = str(cell.value).strip()
    return s or None


def to_label(cell: CellValue | None) -> str | None:
    """Any non-empty cell rendered as free text (whole numbers without '.0')."""
    if cell is None or cell.is_empty:
        return None
    if cell.kind == "number":
        v = float(cell.value)
        if math.isfinite(v) and v.is_integer():
            return str(int(v))
        return repr(v)
    return str(cell.value)
