"""Respondent record store: fragment contracts and the joined record set.

Five fragments are produced upstream from the HRS archives (RAND longitudinal
file, tracker, cross-wave geography, core Sections G/E). Each one carries the
respondent key either as ``hhidpn`` or as ``hhid`` + ``pn``.

The demographic fragment is the base: every respondent in it survives the
join. A respondent missing from another fragment keeps the row and gets
missing values for that fragment's fields.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from src.errors import DuplicateRespondent, MissingInputField, PipelineError

logger = logging.getLogger(__name__)

KEY = "hhidpn"

FRAGMENT_COLUMNS: Dict[str, List[str]] = {
    "demographic": ["r_agey", "inw", "r_work", "s_hhidpn"],
    "residence": ["nursing_home"],
    "geography": ["urbrur", "region", "division"],
    "volunteer": ["volunteer"],
    "caregiving": ["grandchild_care", "parent_personal_care", "parent_errands"],
}

HELPER_PREFIXES = ("adl_helper_", "iadl_helper_")

JOIN_ORDER = ["residence", "geography", "volunteer", "caregiving"]


def make_hhidpn(hhid: pd.Series, pn: pd.Series) -> pd.Series:
    """HRS person key: 6-digit household id followed by the 3-digit person number."""
    h = pd.to_numeric(hhid, errors="coerce")
    p = pd.to_numeric(pn, errors="coerce")
    return (h * 1000 + p).astype("Int64")


def helper_columns(columns) -> List[str]:
    return [c for c in columns if str(c).startswith(HELPER_PREFIXES)]


def require_columns(df: pd.DataFrame, columns: List[str], fragment: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise MissingInputField(fragment, missing)


def _fragment_key(df: pd.DataFrame, fragment: str) -> pd.Series:
    if KEY in df.columns:
        return pd.to_numeric(df[KEY], errors="coerce").astype("Int64")
    require_columns(df, ["hhid", "pn"], fragment)
    return make_hhidpn(df["hhid"], df["pn"])


def prepare_fragment(df: pd.DataFrame, fragment: str) -> pd.DataFrame:
    """Validate one fragment and reduce it to the key plus its contract columns."""
    if fragment not in FRAGMENT_COLUMNS:
        raise ValueError(f"Unknown fragment {fragment!r}")
    df = df.reset_index(drop=True)
    columns = list(FRAGMENT_COLUMNS[fragment])
    require_columns(df, columns, fragment)
    if fragment == "caregiving":
        helpers = helper_columns(df.columns)
        missing = [p + "*" for p in HELPER_PREFIXES if not any(c.startswith(p) for c in helpers)]
        if missing:
            raise MissingInputField(fragment, missing)
        columns += helpers

    key = _fragment_key(df, fragment)
    if key.isna().any():
        raise PipelineError(f"{fragment} fragment has {int(key.isna().sum())} rows without a usable respondent id")
    dupes = key[key.duplicated()].unique()
    if len(dupes):
        raise DuplicateRespondent(fragment, dupes)

    out = df.loc[:, columns].copy()
    out.insert(0, KEY, key)
    return out


def join_fragments(
    demographic: pd.DataFrame,
    residence: pd.DataFrame,
    geography: pd.DataFrame,
    volunteer: pd.DataFrame,
    caregiving: pd.DataFrame,
) -> pd.DataFrame:
    """Left-join all fragments onto the demographic base, one row per respondent."""
    records = prepare_fragment(demographic, "demographic")
    parts = {"residence": residence, "geography": geography, "volunteer": volunteer, "caregiving": caregiving}
    for name in JOIN_ORDER:
        frag = prepare_fragment(parts[name], name)
        matched = records[KEY].isin(frag[KEY]).sum()
        logger.info("Joined %s fragment: %d/%d respondents matched", name, matched, len(records))
        records = records.merge(frag, on=KEY, how="left", validate="one_to_one")
    return records


def read_fragment(data_dir: Path, name: str) -> pd.DataFrame:
    """Read ``<name>.parquet`` (preferred) or ``<name>.csv`` from data_dir."""
    for suffix in (".parquet", ".csv"):
        path = Path(data_dir) / f"{name}{suffix}"
        if path.exists():
            logger.info("Loading %s fragment: %s", name, path)
            return pd.read_parquet(path) if suffix == ".parquet" else pd.read_csv(path, low_memory=False)
    raise FileNotFoundError(f"{name} fragment not found in {data_dir} (expected {name}.parquet or {name}.csv)")


def read_fragments(data_dir: Path) -> Dict[str, pd.DataFrame]:
    return {name: read_fragment(data_dir, name) for name in FRAGMENT_COLUMNS}
