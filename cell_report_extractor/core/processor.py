# cell_report_extractor/core/processor.py
from __future__ import annotations
import logging
from pathlib import Path

from .identity import resolve_discharge_capacity, resolve_serial_number
from .model import ProcessedRecord
from .segmentation import RECORD_SHEET, extract_sections
from .workbook import open_workbook

_LOG = logging.getLogger(__name__)


def _extract(data: bytes, file_name: str) -> ProcessedRecord:
    with open_workbook(data) as wb:
        serial = resolve_serial_number(wb, file_name)
        capacity = resolve_discharge_capacity(wb)
        sections = extract_sections(wb.rows(RECORD_SHEET))
    _LOG.debug("%s: serial=%s capacity=%s sections=%s", file_name, serial, capacity, list(sections))
    return ProcessedRecord(
        file_name=file_name,
        serial_number=serial,
        discharge_capacity=capacity,
        sections=sections,
    )


def process_workbook_bytes(data: bytes, file_name: str) -> ProcessedRecord:
    """
    One test report -> one ProcessedRecord.

    Never raises: any failure is encoded in the record ('Error' identity fields,
    no sections, message in ``error``) so a batch keeps going.
    """
    try:
        return _extract(data, file_name)
    except Exception as e:
        _LOG.warning("failed to process %s: %s", file_name, e)
        return ProcessedRecord.failed(file_name, str(e) or type(e).__name__)


def process_workbook_file(path: Path) -> ProcessedRecord:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        _LOG.warning("failed to read %s: %s", path, e)
        return ProcessedRecord.failed(path.name, str(e))
    return process_workbook_bytes(data, path.name)
