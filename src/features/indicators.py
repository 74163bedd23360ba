"""Ternary productive-activity indicators from raw HRS items.

Indicators are pandas nullable ``boolean`` columns: True, False, or <NA>
for unknown. Unknown is never collapsed into False.

Two combination rules are used, at different levels:

- ``or_rule`` (item level): True if any input is True, False if at least one
  input is known and none is True, unknown only when every input is unknown.
  Used for parental caregiving (two items) and for the spouse/partner count
  across helper slots.
- ``majority_rule`` (activity level): unknown when two or more inputs are
  unknown, otherwise True if any input is True, otherwise False. Used for the
  caregiver composite and the multi-activity composite.

Spousal caregiving is not reported on the caregiver's own record; see
``src.features.spouse_linkage``.
"""

from __future__ import annotations

from typing import Dict, Tuple

import pandas as pd

from src.data.fragments import helper_columns
from src.features import codes

UNKNOWN_THRESHOLD = 2

ACTIVITIES = [
    "work",
    "volunteer",
    "spousal_caregiver",
    "parental_caregiver",
    "grandchild_caregiver",
    "caregiver",
    "multi_activity",
]


def recode(values: pd.Series, table: Dict[int, bool]) -> pd.Series:
    """Map raw codes through a value table; anything not in the table is <NA>."""
    raw = pd.to_numeric(values, errors="coerce")
    return raw.map(table).astype("boolean")


def _tally(indicators: Tuple[pd.Series, ...]) -> Tuple[pd.Series, pd.Series, int]:
    if not indicators:
        raise ValueError("at least one indicator is required")
    frame = pd.concat([s.astype("boolean") for s in indicators], axis=1, ignore_index=True)
    n_true = frame.fillna(False).astype(bool).sum(axis=1)
    n_unknown = frame.isna().sum(axis=1)
    return n_true, n_unknown, frame.shape[1]


def or_rule(*indicators: pd.Series) -> pd.Series:
    n_true, n_unknown, n = _tally(indicators)
    out = pd.Series(pd.NA, index=n_true.index, dtype="boolean")
    out[n_unknown < n] = False
    out[n_true > 0] = True
    return out


def majority_rule(*indicators: pd.Series) -> pd.Series:
    n_true, n_unknown, _ = _tally(indicators)
    out = pd.Series(n_true > 0, dtype="boolean")
    return out.mask(n_unknown >= UNKNOWN_THRESHOLD)


def spouse_named_helper(df: pd.DataFrame) -> pd.Series:
    """True when any ADL/IADL helper slot names the spouse/partner."""
    slots = helper_columns(df.columns)
    if not slots:
        return pd.Series(pd.NA, index=df.index, dtype="boolean")
    return or_rule(*(recode(df[c], codes.HELPER_RELATIONSHIP) for c in slots))


def derive_indicators(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out["work"] = recode(df["r_work"], codes.WORK)
    out["volunteer"] = recode(df["volunteer"], codes.YES_NO)
    out["grandchild_caregiver"] = recode(df["grandchild_care"], codes.YES_NO)
    out["parental_caregiver"] = or_rule(
        recode(df["parent_personal_care"], codes.YES_NO),
        recode(df["parent_errands"], codes.YES_NO),
    )
    out["spouse_named_helper"] = spouse_named_helper(df)
    return out


def combine_indicators(df: pd.DataFrame) -> pd.DataFrame:
    """Caregiver and multi-activity composites; needs ``spousal_caregiver`` from linkage."""
    out = df.copy()
    out["caregiver"] = majority_rule(
        out["spousal_caregiver"], out["parental_caregiver"], out["grandchild_caregiver"]
    )
    out["multi_activity"] = majority_rule(out["work"], out["volunteer"], out["caregiver"])
    return out


def label_strata(df: pd.DataFrame) -> pd.DataFrame:
    """Readable rural/urban, region and division labels; unlisted codes become <NA>."""
    out = df.copy()
    out["rural_urban"] = pd.to_numeric(df["urbrur"], errors="coerce").map(codes.RURAL_URBAN).astype("string")
    for level, table in codes.GEOGRAPHIES.items():
        out[f"{level}_name"] = pd.to_numeric(df[level], errors="coerce").map(table).astype("string")
    return out
