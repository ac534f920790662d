# cell_report_extractor/core/pipeline.py
from __future__ import annotations
from pathlib import Path

from .model import ProcessedRecord
from .plotting import save_section_plots
from .reports import write_sections, write_summary

def run_pipeline(records: list[ProcessedRecord], cfg: dict, out_root: Path):
    if not records:
        print("[INFO] no records to report.")
        return
    out_root.mkdir(parents=True, exist_ok=True)
    legend_ncol = int(cfg.get("legend", {}).get("ncol", 4))

    # reports
    rep = cfg.get("reports", {}) or {}
    fmt = str(rep.get("format", "csv")).lower()
    mat_var = str(rep.get("mat_variable", "summary"))
    write_summary(records, out_root / "summary", "batch summary", fmt=fmt, mat_variable=mat_var)

    if bool(rep.get("sections", True)):
        taken: set[str] = set()
        for rec in records:
            write_sections(rec, out_root / "sections", taken)

    failed = [r for r in records if r.error is not None]
    for r in failed:
        print(f"[WARN] {r.file_name}: {r.error}")

    # plots
    plots = cfg.get("plots", {}) or {}
    if bool(plots.get("enabled", True)):
        save_section_plots(
            records,
            out_root / "plots",
            sections=plots.get("sections") or None,
            legend_ncol=legend_ncol,
            max_points=int(plots.get("max_points_per_series", 5000)),
        )

    print(f"[INFO] {len(records)} file(s) reported, {len(failed)} failed.")
