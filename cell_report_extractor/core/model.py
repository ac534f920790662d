# cell_report_extractor/core/model.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal, Mapping

CellKind = Literal["text", "number", "empty"]

UNKNOWN_SERIAL = "Unknown"
CAPACITY_MISSING = "N/A"
ERROR_MARK = "Error"


@dataclass(frozen=True)
class CellValue:
    kind: CellKind
    value: str | float | None = None

    @classmethod
    def from_raw(cls, raw) -> "CellValue":
        """Tag a loosely typed spreadsheet value once; nothing downstream coerces implicitly."""
        if raw is None:
            return EMPTY
        if isinstance(raw, bool):
            return cls("text", str(raw))
        if isinstance(raw, (int, float)):
            return cls("number", float(raw))
        text = str(raw)
        if text == "":
            return EMPTY
        return cls("text", text)

    @property
    def is_empty(self) -> bool:
        return self.kind == "empty"


EMPTY = CellValue("empty")


@dataclass(frozen=True)
class Sample:
    relative_time: float      # seconds since test start
    capacity: float           # Ah


@dataclass(frozen=True)
class ProcessedRecord:
    file_name: str
    serial_number: str
    discharge_capacity: float | str          # float, "N/A" or "Error"
    sections: Mapping[str, tuple[Sample, ...]] = field(default_factory=dict)
    error: str | None = None

    @classmethod
    def failed(cls, file_name: str, message: str) -> "ProcessedRecord":
        return cls(
            file_name=file_name,
            serial_number=ERROR_MARK,
            discharge_capacity=ERROR_MARK,
            sections={},
            error=message,
        )

    @property
    def n_samples(self) -> int:
        return sum(len(s) for s in self.sections.values())

    def to_dict(self) -> dict:
        out = {
            "fileName": self.file_name,
            "serialNumber": self.serial_number,
            "dischargeCapacity": self.discharge_capacity,
            "sections": {
                name: [{"relativeTime": s.relative_time, "capacity": s.capacity} for s in samples]
                for name, samples in self.sections.items()
            },
        }
        if self.error is not None:
            out["error"] = self.error
        return out
