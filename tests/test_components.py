"""Editor normalization and help text tests (no Streamlit session needed)."""

import numpy as np
import pandas as pd

from config.parameters import PARAM_SPECS
from ui.components import build_help_text, get_default_value, normalize_category_rows, normalize_channel_rows


def test_channel_rows_are_normalized():
    df = pd.DataFrame([
        {"enabled": True, "id": "40.1", "name": "Main", "viewership": "1000", "fill_rate": np.nan,
         "live_hours": 5},
        {"enabled": False, "id": " 40.2 ", "name": None, "viewership": 10, "fill_rate": 40, "live_hours": None},
        {"enabled": None, "id": None, "name": "new row", "viewership": 1, "fill_rate": 10, "live_hours": 1},
    ])
    channels = normalize_channel_rows(df)

    assert [c.id for c in channels] == ["40.1", "40.2"]
    assert channels[0].viewership == 1000.0
    assert channels[0].fill_rate is None
    assert channels[1].enabled is False
    assert channels[1].name == ""
    assert channels[1].live_hours == 0.0


def test_empty_editor_gives_no_rows():
    assert normalize_channel_rows(pd.DataFrame()) == []
    assert normalize_category_rows(None) == []


def test_category_rows_are_normalized():
    df = pd.DataFrame([{"id": "news", "name": "News", "monthly_views": 2500, "fill_rate": 25}])
    categories = normalize_category_rows(df)

    assert categories[0].id == "news"
    assert categories[0].fill_rate == 25.0
    assert categories[0].cpm_rate == 0.0


def test_help_text_includes_typical_range():
    text = build_help_text(PARAM_SPECS["channel_count"])
    assert text.endswith("Typical range: 1 - 6")


def test_default_values():
    assert get_default_value(PARAM_SPECS["platform"]) == "mux"
    assert get_default_value({"type": "int", "min": 3}) == 3
    assert get_default_value({"type": "bool"}) is False
