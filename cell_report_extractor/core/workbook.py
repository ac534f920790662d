# cell_report_extractor/core/workbook.py
from __future__ import annotations
import io
import logging

from openpyxl import load_workbook

from .model import CellValue

_LOG = logging.getLogger(__name__)


class MalformedInputError(ValueError):
    """The byte buffer is not a readable spreadsheet package."""


class Workbook:
    """
    Read-only view over the named sheets of one .xlsx buffer.

    Missing sheets and cells are a normal outcome (None / []), never an error.
    Use as a context manager so the underlying archive is released.
    """

    def __init__(self, data: bytes):
        try:
            self._wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        except Exception as e:
            raise MalformedInputError(f"not a readable workbook: {e}") from e
        _LOG.debug("opened workbook with sheets %s", self._wb.sheetnames)

    def __enter__(self) -> "Workbook":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._wb.close()

    @property
    def sheet_names(self) -> list[str]:
        return list(self._wb.sheetnames)

    def sheet(self, name: str):
        if name not in self._wb.sheetnames:
            return None
        return self._wb[name]

    def cell(self, sheet_name: str, address: str) -> CellValue | None:
        ws = self.sheet(sheet_name)
        if ws is None:
            return None
        value = CellValue.from_raw(ws[address].value)
        return None if value.is_empty else value

    def rows(self, sheet_name: str) -> list[list[CellValue]]:
        ws = self.sheet(sheet_name)
        if ws is None:
            return []
        return [[CellValue.from_raw(v) for v in row] for row in ws.iter_rows(values_only=True)]


def open_workbook(data: bytes) -> Workbook:
    return Workbook(data)
