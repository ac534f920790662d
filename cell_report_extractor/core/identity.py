# cell_report_extractor/core/identity.py
from __future__ import annotations
import logging
import re

from .model import CAPACITY_MISSING, UNKNOWN_SERIAL
from .normalize import to_float, to_label
from .workbook import Workbook
from ..utils.filenames import serial_from_name

TEMPLATE_SHEET = "Template information"
TEMPLATE_CELL = "A1"
LOOP_SHEET = "Loop level"
CAPACITY_CELL = "H2"

# the token may not run on into a hyphen ("XZ-99" is left to the split rule)
_BARCODE_RE = re.compile(r"Barcode:\s*([A-Za-z0-9]+)(?![A-Za-z0-9-])", re.IGNORECASE)
_BARCODE_SPLIT_RE = re.compile(r"Barcode:", re.IGNORECASE)

_LOG = logging.getLogger(__name__)


def serial_from_label(label: str) -> str:
    """
    Barcode text -> serial number.

    Order:
      1) 'Barcode:' followed by an alphanumeric token not joined to a '-'
      2) whatever follows the first 'Barcode:', trimmed (may end up blank)
      3) the label verbatim
    """
    m = _BARCODE_RE.search(label)
    if m:
        return m.group(1)
    parts = _BARCODE_SPLIT_RE.split(label, maxsplit=1)
    if len(parts) > 1 and parts[1]:
        return parts[1].strip()
    return label


def resolve_serial_number(wb: Workbook, file_name: str) -> str:
    serial = ""
    label = to_label(wb.cell(TEMPLATE_SHEET, TEMPLATE_CELL))
    if label is not None:
        serial = serial_from_label(label)

    if not serial.strip() or serial == UNKNOWN_SERIAL:
        from_name = serial_from_name(file_name)
        if from_name:
            _LOG.debug("serial for %s taken from file name", file_name)
            return from_name
        return UNKNOWN_SERIAL
    return serial


def resolve_discharge_capacity(wb: Workbook) -> float | str:
    value = to_float(wb.cell(LOOP_SHEET, CAPACITY_CELL))
    return CAPACITY_MISSING if value is None else value
