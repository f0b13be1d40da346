"""Export-to-estimate tests."""

import json
import os

import pandas as pd
import pytest
from openpyxl import load_workbook

from estimate_export import ExportBlockedError, export_estimate, make_run_id


def test_export_writes_run_folder(tmp_path, default_config):
    result = export_estimate(default_config, tmp_path)

    assert os.path.dirname(result["out_dir"]) == str(tmp_path)
    for key in ("out_xlsx", "csv_path", "meta_path"):
        assert os.path.exists(result[key])

    with open(result["meta_path"]) as f:
        meta = json.load(f)
    assert meta["run_id"] == result["run_id"]
    assert meta["config_snapshot"]["platform"] == "mux"
    assert meta["costs"]["encoding"] == pytest.approx(194.40)


def test_workbook_sheets(tmp_path, default_config):
    wb = load_workbook(export_estimate(default_config, tmp_path)["out_xlsx"])
    assert wb.sheetnames == ["Summary", "Costs", "Revenue", "Channels", "VOD Categories", "Hardware", "Assumptions"]
    assert wb["Summary"]["A1"].value == "metric"


def test_channel_csv_has_one_row_per_channel(tmp_path, default_config):
    df = pd.read_csv(export_estimate(default_config, tmp_path)["csv_path"])
    assert len(df) == len(default_config.channels)


def test_validation_errors_block_export(tmp_path, default_config):
    with pytest.raises(ExportBlockedError, match="Channel count"):
        export_estimate(default_config.replace(channel_count=0), tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_warnings_do_not_block_export(tmp_path, self_hosted_config):
    result = export_estimate(self_hosted_config.replace(peak_concurrent_viewers=1000), tmp_path)
    with open(result["meta_path"]) as f:
        assert len(json.load(f)["warnings"]) == 2


def test_run_id_depends_on_config():
    a = make_run_id({"platform": "mux"})
    b = make_run_id({"platform": "cloudflare"})
    assert a.split("_")[-1] != b.split("_")[-1]
