# cell_report_extractor/core/reports.py
from __future__ import annotations
from pathlib import Path
import re
from typing import Literal, Sequence
import numpy as np
import pandas as pd
from scipy.io import savemat

from .model import ProcessedRecord
from ..utils.filenames import channel_from_name, date_from_name

ReportFormat = Literal["csv", "mat", "both"]

SUMMARY_COLUMNS = [
    "fileName", "serialNumber", "date", "channel", "dischargeCapacity",
    "n_sections", "n_samples", "error",
]
SECTION_COLUMNS = ["section", "relativeTime", "capacity"]


def build_summary(records: Sequence[ProcessedRecord]) -> pd.DataFrame:
    """One row per file; sentinel capacities ('N/A', 'Error') are kept as text."""
    rows = [{
        "fileName": r.file_name,
        "serialNumber": r.serial_number,
        "date": date_from_name(r.file_name),
        "channel": channel_from_name(r.file_name),
        "dischargeCapacity": r.discharge_capacity,
        "n_sections": len(r.sections),
        "n_samples": r.n_samples,
        "error": r.error or "",
    } for r in records]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def build_sections_frame(record: ProcessedRecord) -> pd.DataFrame:
    """Long format: one row per sample, in section order."""
    rows = [
        {"section": name, "relativeTime": s.relative_time, "capacity": s.capacity}
        for name, samples in record.sections.items()
        for s in samples
    ]
    return pd.DataFrame(rows, columns=SECTION_COLUMNS)


def _write_csv(df_out: pd.DataFrame, out_csv: Path, title: str) -> None:
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    df_out.to_csv(out_csv, index=False, encoding="utf-8")
    print(f"[OK] wrote report: {title} → {out_csv}")

def _to_mat_cellstr(seq: list[str]) -> np.ndarray:
    """Make a MATLAB column cell array from a list of strings."""
    seq2 = [("" if s is None else str(s)) for s in seq]
    arr = np.empty((len(seq2), 1), dtype=object)
    arr[:, 0] = seq2
    return arr

def _write_mat(df_out: pd.DataFrame, out_mat: Path, varname: str, title: str) -> None:
    """
    Save a MATLAB struct with fields matching the CSV columns.
    Strings become cell arrays (Nx1), numerics become double (Nx1);
    sentinel capacities become NaN.
    """
    out_mat.parent.mkdir(parents=True, exist_ok=True)

    def numcol(name: str) -> np.ndarray:
        return pd.to_numeric(df_out[name], errors="coerce").to_numpy(dtype=float).reshape(-1, 1)

    def strcol(name: str) -> np.ndarray:
        return _to_mat_cellstr(df_out[name].astype(str).replace("nan", "", regex=False).tolist())

    mat_struct = {
        "fileName":          strcol("fileName"),
        "serialNumber":      strcol("serialNumber"),
        "date":              strcol("date"),
        "channel":           strcol("channel"),
        "dischargeCapacity": numcol("dischargeCapacity"),
        "n_sections":        numcol("n_sections"),
        "n_samples":         numcol("n_samples"),
        "error":             strcol("error"),
    }
    savemat(out_mat, {varname: mat_struct})
    print(f"[OK] wrote report: {title} → {out_mat}")

def write_summary(records: Sequence[ProcessedRecord],
                  out_base: Path,
                  title: str,
                  fmt: ReportFormat = "csv",
                  mat_variable: str = "summary") -> None:
    """
    Write the batch summary in the requested format.
    - out_base is a *base path without extension* (e.g., .../summary)
    - fmt: "csv" | "mat" | "both"
    - mat_variable: MATLAB variable name of the struct
    """
    if not records:
        return
    df_out = build_summary(records)

    if fmt in ("csv", "both"):
        _write_csv(df_out, out_base.with_suffix(".csv"), title)
    if fmt in ("mat", "both"):
        _write_mat(df_out, out_base.with_suffix(".mat"), mat_variable, title)


def sanitize_name(name: str) -> str:
    s = re.sub(r"[^A-Za-z0-9._-]+", "_", name).strip("_")
    return s[:120] if len(s) > 120 else s

def write_sections(record: ProcessedRecord, out_dir: Path,
                   taken: set[str] | None = None) -> Path | None:
    """
    Per-file section table; nothing is written for files without sections.
    ``taken`` collects the names already used in this batch so reports with the
    same file name (from different folders) get '_2', '_3', ... instead of
    overwriting each other.
    """
    if not record.sections:
        return None
    base = sanitize_name(Path(record.file_name).stem) or "report"
    name, n = base, 1
    while taken is not None and name.lower() in taken:
        n += 1
        name = f"{base}_{n}"
    if taken is not None:
        taken.add(name.lower())
    out_csv = out_dir / f"{name}.csv"
    _write_csv(build_sections_frame(record), out_csv, f"{record.serial_number} sections")
    return out_csv
