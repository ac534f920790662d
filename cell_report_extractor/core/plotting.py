# cell_report_extractor/core/plotting.py
from __future__ import annotations
from pathlib import Path
from typing import Sequence
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .model import UNKNOWN_SERIAL, ProcessedRecord
from .reports import sanitize_name


def _thin_xy(x, y, max_points: int):
    """Light decimator: keep at most max_points evenly spaced points."""
    n = len(x)
    if n <= max_points or max_points <= 0:
        return x, y
    idx = np.linspace(0, n - 1, max_points).astype(int)
    return x[idx], y[idx]

def series_label(record: ProcessedRecord) -> str:
    """Serial number, or the file name when the serial could not be resolved."""
    if record.serial_number == UNKNOWN_SERIAL:
        return record.file_name
    return record.serial_number

def section_names(records: Sequence[ProcessedRecord]) -> list[str]:
    names = set()
    for r in records:
        names.update(r.sections.keys())
    return sorted(names)

def save_section_plot(section: str,
                      records: Sequence[ProcessedRecord],
                      out_dir: Path,
                      legend_ncol: int = 4,
                      max_points: int = 5000) -> Path | None:
    """Capacity vs relative time for one section; one line per file (see series_label)."""
    prepared = []
    for r in records:
        samples = r.sections.get(section)
        if r.error is not None or not samples:
            continue
        x = np.array([s.relative_time for s in samples], dtype=float)
        y = np.array([s.capacity for s in samples], dtype=float)
        x, y = _thin_xy(x, y, max_points)
        prepared.append((x, y, series_label(r)))

    if not prepared:
        print(f"[INFO] section '{section}': no file has data; skipping plot.")
        return None

    out_dir.mkdir(parents=True, exist_ok=True)
    plt.figure(figsize=(11, 6))
    for x, y, label in prepared:
        plt.plot(x, y, label=label)
    plt.xlabel("Relative time [s]")
    plt.ylabel("Capacity [Ah]")
    plt.title(f"{section} — Capacity vs Relative time")
    plt.grid(True, alpha=0.3)
    plt.legend(
        fontsize=8,
        ncol=legend_ncol,
        loc="upper center",
        bbox_to_anchor=(0.5, -0.15),
        frameon=False,
    )
    plt.tight_layout(rect=[0, 0.18, 1, 1])
    out_path = out_dir / f"{sanitize_name(section) or 'section'}.png"
    plt.savefig(out_path, dpi=160)
    plt.close()
    print(f"[OK] {section}: {len(prepared)} series → {out_path}")
    return out_path

def save_section_plots(records: Sequence[ProcessedRecord],
                       out_dir: Path,
                       sections: Sequence[str] | None = None,
                       legend_ncol: int = 4,
                       max_points: int = 5000) -> list[Path]:
    wanted = list(sections) if sections else section_names(records)
    written = []
    for name in wanted:
        p = save_section_plot(name, records, out_dir, legend_ncol=legend_ncol, max_points=max_points)
        if p is not None:
            written.append(p)
    return written
