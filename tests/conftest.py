from typing import Dict, List

import numpy as np
import pandas as pd
import pytest

from src.data.fragments import FRAGMENT_COLUMNS

HELPER_SLOTS = ["adl_helper_1", "adl_helper_2", "iadl_helper_1"]

DEFAULTS = {
    "r_agey": 70,
    "inw": 1,
    "r_work": np.nan,
    "s_hhidpn": 0,
    "nursing_home": 5,
    "urbrur": 1,
    "region": 3,
    "division": 5,
    "volunteer": np.nan,
    "grandchild_care": np.nan,
    "parent_personal_care": np.nan,
    "parent_errands": np.nan,
    **{slot: np.nan for slot in HELPER_SLOTS},
}


def build_fragments(people: List[dict]) -> Dict[str, pd.DataFrame]:
    """Split per-person dicts (hhid, pn and any raw fields) into the five fragments."""
    full = pd.DataFrame([{**DEFAULTS, **p} for p in people])
    out = {}
    for name, cols in FRAGMENT_COLUMNS.items():
        cols = ["hhid", "pn"] + cols
        if name == "caregiving":
            cols += HELPER_SLOTS
        out[name] = full[cols].copy()
    return out


@pytest.fixture
def make_fragments():
    return build_fragments
