#!/usr/bin/env python3
"""
estimate_export.py

"Export to estimate": writes a per-run folder with an Excel workbook of the
current projections, the per-channel revenue CSV, and metadata.json.
Refuses to export while the configuration has error-severity validation
results.
"""

import os, json, hashlib, datetime, logging
from typing import Dict, Any, Optional

from openpyxl import Workbook
from openpyxl.styles import Font

from config_manager import StationConfig
from estimator.runner import Estimate, compute_estimate
from estimator.validation import has_validation_errors
from analysis.metrics import (
    compute_kpis,
    cost_breakdown_frame,
    revenue_breakdown_frame,
    channel_revenue_frame,
    vod_category_frame,
    hardware_frame,
)

logger = logging.getLogger(__name__)


class ExportBlockedError(RuntimeError):
    """Raised when export is attempted while validation errors exist."""


def _short_hash(obj: Any) -> str:
    s = json.dumps(obj, sort_keys=True, default=str)
    return hashlib.sha1(s.encode("utf-8")).hexdigest()[:8]


def _now_ts() -> str:
    return datetime.datetime.now().strftime("%Y%m%d_%H%M%S")


def make_run_id(config_like: Dict[str, Any]) -> str:
    return f"{_now_ts()}_{_short_hash(config_like)}"


def _write_frame(ws, df) -> None:
    ws.append(list(df.columns))
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in df.itertuples(index=False):
        ws.append([None if (isinstance(v, float) and v != v) else v for v in row])


def _write_pairs(ws, header, pairs) -> None:
    ws.append(list(header))
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for key, value in pairs:
        if isinstance(value, (list, dict)):
            value = json.dumps(value, default=str)
        ws.append([key, value])


def build_workbook(config: StationConfig, estimate: Estimate) -> Workbook:
    """Assemble the estimate workbook in memory."""
    wb = Workbook()

    # ---------- Summary ----------
    ws = wb.active
    ws.title = "Summary"
    kpis = compute_kpis(estimate.costs, estimate.revenue)
    summary = [("platform", config.platform), ("channels", config.channel_count)]
    summary += [(k, v) for k, v in kpis.items()]
    if estimate.revenue.premium_sponsorship_revenue is not None:
        summary.append(("premium_sponsorship_revenue", estimate.revenue.premium_sponsorship_revenue))
    _write_pairs(ws, ("metric", "value"), summary)

    # ---------- Costs / Revenue ----------
    _write_frame(wb.create_sheet("Costs"), cost_breakdown_frame(estimate.costs))
    _write_frame(wb.create_sheet("Revenue"), revenue_breakdown_frame(estimate.revenue))

    # ---------- Detail tables ----------
    _write_frame(wb.create_sheet("Channels"), channel_revenue_frame(config, estimate.revenue))
    _write_frame(wb.create_sheet("VOD Categories"), vod_category_frame(config, estimate.revenue))
    _write_frame(wb.create_sheet("Hardware"), hardware_frame(estimate.hardware))

    # ---------- Assumptions ----------
    snapshot = config.to_dict()
    revenue = snapshot.pop("revenue")
    snapshot.pop("channels")
    snapshot.pop("vod_categories")
    pairs = list(snapshot.items()) + [(f"revenue.{k}", v) for k, v in revenue.items()]
    _write_pairs(wb.create_sheet("Assumptions"), ("setting", "value"), pairs)

    return wb


def export_estimate(config: StationConfig,
                    output_root: str,
                    estimate: Optional[Estimate] = None) -> Dict[str, Any]:
    """
    Create a per-run folder with the workbook, channel CSV and metadata.json.

    Args:
        config: Configuration to export
        output_root: Parent directory for run folders (e.g. "./exports")
        estimate: Precomputed estimate for ``config``; computed when omitted

    Returns:
        Dict with run_id, out_dir, out_xlsx, csv_path and meta_path

    Raises:
        ExportBlockedError: if any validation result has error severity
    """
    if estimate is None:
        estimate = compute_estimate(config)
    if has_validation_errors(estimate.validation):
        errors = [r.message for r in estimate.validation if r.severity == "error"]
        raise ExportBlockedError("Fix validation errors before exporting: " + "; ".join(errors))

    config_snapshot = config.to_dict()

    # --- Make run folder -----------------------------------------------------
    run_id = make_run_id(config_snapshot)
    out_dir = os.path.join(str(output_root), run_id)
    os.makedirs(out_dir, exist_ok=True)

    # --- Per-channel revenue CSV --------------------------------------------
    csv_path = os.path.join(out_dir, "channel_revenue.csv")
    channel_revenue_frame(config, estimate.revenue).to_csv(csv_path, index=False)

    # --- Workbook ------------------------------------------------------------
    out_xlsx = os.path.join(out_dir, "estimate.xlsx")
    build_workbook(config, estimate).save(out_xlsx)

    # --- Metadata ------------------------------------------------------------
    meta = {
        "run_id": run_id,
        "timestamp": datetime.datetime.now().isoformat(),
        "output_root": str(output_root),
        "out_dir": out_dir,
        "out_xlsx": out_xlsx,
        "csv_path": csv_path,
        "costs": estimate.costs.to_dict(),
        "total_revenue": estimate.revenue.total_revenue,
        "net_operating_profit": estimate.revenue.net_operating_profit,
        "recommended_hardware": estimate.hardware.recommended_hardware,
        "warnings": [r.message for r in estimate.validation],
        "config_snapshot": config_snapshot,
    }
    meta_path = os.path.join(out_dir, "metadata.json")
    with open(meta_path, "w") as f:
        json.dump(meta, f, indent=2, default=str)

    logger.info("Exported estimate %s to %s", run_id, out_dir)
    return {"run_id": run_id, "out_dir": out_dir, "out_xlsx": out_xlsx, "csv_path": csv_path,
            "meta_path": meta_path}
