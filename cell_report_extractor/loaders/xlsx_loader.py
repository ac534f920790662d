# cell_report_extractor/loaders/xlsx_loader.py
from __future__ import annotations
from pathlib import Path
import logging

from ..core.model import ProcessedRecord
from ..core.processor import process_workbook_file

_LOG = logging.getLogger(__name__)


def load(path: Path, cfg: dict, out_root: Path) -> list[ProcessedRecord]:
    """
    Accepts: one vendor .xlsx test report.
    Returns: a single ProcessedRecord (failures are encoded, not raised).
    """
    rec = process_workbook_file(path)
    if rec.error is None:
        _LOG.info("LOADED %s: serial %s, %d section(s)", path.name, rec.serial_number, len(rec.sections))
    return [rec]
