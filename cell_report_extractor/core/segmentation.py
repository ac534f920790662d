# cell_report_extractor/core/segmentation.py
from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass, field
import logging
from typing import Iterable, NamedTuple, Sequence

from .model import CellValue, Sample
from .normalize import to_float, to_str

RECORD_SHEET = "Record level"

# Column contract of the vendor export (0-based): E, H, N
MODE_COL = 4
TIME_COL = 7
CAPACITY_COL = 13

REST_KEYWORD = "still"

_LOG = logging.getLogger(__name__)


class RecordRow(NamedTuple):
    mode: str | None
    relative_time: float | None
    capacity: float | None

    @property
    def is_valid(self) -> bool:
        return self.mode is not None and self.relative_time is not None and self.capacity is not None


def _at(row: Sequence[CellValue], idx: int) -> CellValue | None:
    return row[idx] if idx < len(row) else None


def tokenize_record_rows(rows: Iterable[Sequence[CellValue]]) -> list[RecordRow]:
    """Measurement rows (header already removed) -> (mode, time, capacity) optionals."""
    return [
        RecordRow(
            mode=to_str(_at(row, MODE_COL)),
            relative_time=to_float(_at(row, TIME_COL)),
            capacity=to_float(_at(row, CAPACITY_COL)),
        )
        for row in rows
    ]


def is_rest_mode(mode: str) -> bool:
    return REST_KEYWORD in mode.lower()


@dataclass
class _Accumulator:
    """State of one segmentation pass: the open block plus per-label flush counts."""
    sections: dict[str, tuple[Sample, ...]] = field(default_factory=dict)
    counts: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    mode: str | None = None
    samples: list[Sample] = field(default_factory=list)

    def _name_for(self, label: str) -> str:
        self.counts[label] += 1
        name = label if self.counts[label] == 1 else f"{label} {self.counts[label]}"
        # a literal label like "Charge 2" may already hold the suffixed name
        while name in self.sections:
            self.counts[label] += 1
            name = f"{label} {self.counts[label]}"
        return name

    def flush(self) -> None:
        if self.mode is not None and self.samples:
            self.sections[self._name_for(self.mode)] = tuple(self.samples)
        self.mode = None
        self.samples = []

    def push(self, row: RecordRow) -> None:
        if is_rest_mode(row.mode):
            self.flush()
            return
        if row.mode != self.mode:
            self.flush()
            self.mode = row.mode
        self.samples.append(Sample(row.relative_time, row.capacity))


def segment_phases(rows: Iterable[RecordRow]) -> dict[str, tuple[Sample, ...]]:
    """
    Split an ordered row stream into named, contiguous step-mode segments.

    - unparseable rows are skipped and do not close the open segment
    - rows whose mode contains 'still' close the open segment and are dropped
    - a repeated label gets a running suffix: 'Charge', 'Charge 2', ...
    """
    acc = _Accumulator()
    dropped = 0
    for row in rows:
        if not row.is_valid:
            dropped += 1
            continue
        acc.push(row)
    acc.flush()
    if dropped:
        _LOG.debug("skipped %d unparseable record rows", dropped)
    return acc.sections


def extract_sections(rows: Sequence[Sequence[CellValue]]) -> dict[str, tuple[Sample, ...]]:
    """Rows of the 'Record level' sheet including its header row."""
    if len(rows) <= 1:
        return {}
    return segment_phases(tokenize_record_rows(rows[1:]))
