# cell_report_extractor/main.py
from __future__ import annotations
from pathlib import Path
import argparse
import logging
import sys
import yaml

from .loaders import xlsx_loader
from .utils.detect import discover_inputs
from .core.pipeline import run_pipeline

def load_config(cfg_path: Path) -> dict:
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def main(argv: list[str] | None = None):
    here = Path(__file__).resolve().parent
    ap = argparse.ArgumentParser(description="Extract capacity curves from battery test-report workbooks.")
    ap.add_argument("input", nargs="?", help="report file or folder (overrides input.path)")
    ap.add_argument("--config", type=Path, default=here / "config.yaml")
    args = ap.parse_args(argv)

    # ---------- config ----------
    cfg = load_config(args.config)
    log_cfg = cfg.get("logging", {}) or {}
    logging.basicConfig(level=str(log_cfg.get("level", "INFO")).upper(),
                        format="%(levelname)s %(name)s: %(message)s")

    in_cfg = cfg.get("input", {}) or {}
    in_path = Path(args.input or in_cfg.get("path", ".")).resolve()
    recurse = bool(in_cfg.get("recurse", True))
    out_root = Path((cfg.get("output", {}) or {}).get("root", "out")).resolve()

    verbose = bool(log_cfg.get("verbose", True))
    if verbose:
        print(f"[cfg] input={in_path} (recurse={recurse})")
        print(f"[cfg] output={out_root}")

    # ---------- discover ----------
    detected = discover_inputs(in_path, recurse=recurse)
    if not detected:
        print(f"[INFO] No XLSX inputs found under: {in_path}")
        sys.exit(0)
    if verbose:
        kinds = {}
        for d in detected:
            kinds.setdefault(d.kind, 0)
            kinds[d.kind] += 1
        print(f"[detector] found {sum(kinds.values())} inputs → {kinds}")

    # ---------- loader registry ----------
    registry = {
        "xlsx": xlsx_loader.load,
    }

    records = []
    for item in detected:
        loader = registry.get(item.kind)
        if loader is None:
            if verbose:
                print(f"[skip] no loader for {item.kind}: {item.path.name}")
            continue
        if verbose:
            print(f"  [load] {item.kind:6} {item.path.name}")
        records.extend(loader(item.path, cfg, out_root))

    run_pipeline(records, cfg, out_root)

    if verbose:
        print(f"[summary] finished {len(records)} file(s) → {out_root}")

if __name__ == "__main__":
    main()
