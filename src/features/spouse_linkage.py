"""Attribute spousal caregiving to the spouse's own record.

The ADL/IADL "who helps" items are answered by the person receiving help.
When a respondent names their spouse/partner as a helper, the caregiving
fact belongs to the spouse, so it is carried across through the
respondent's spouse cross-reference (``s_hhidpn``) and joined onto the
record whose ``hhidpn`` equals that id. Known helpers that do not include
the spouse carry False across the same way.

Reports whose spouse id is missing, zero, non-integer or equal to the
reporter's own id cannot be attributed to anyone. They are excluded and
counted; the count is logged and carried into the run report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

import pandas as pd

logger = logging.getLogger(__name__)


@dataclass
class SpouseLinkage:
    mapping: pd.Series
    unresolved: int = 0
    unresolved_ids: List[int] = field(default_factory=list)
    unmatched: int = 0

    @property
    def spouse_ids(self) -> List[int]:
        return self.mapping.index.tolist()

    @property
    def caregiver_ids(self) -> List[int]:
        return self.mapping.index[self.mapping.to_numpy(dtype=bool)].tolist()


def build_caregiver_linkage(df: pd.DataFrame) -> SpouseLinkage:
    """Map spouse id -> spousal caregiver flag from every known helper report.

    A report naming the spouse/partner gives True; known helpers none of whom
    is the spouse give False. When a spouse is reached more than once, True wins.
    """
    reporters = df.loc[df["spouse_named_helper"].notna()]
    named = reporters["spouse_named_helper"].astype(bool)
    spouse = pd.to_numeric(reporters["s_hhidpn"], errors="coerce")
    own = reporters["hhidpn"].astype("float64")
    valid = spouse.notna() & (spouse > 0) & (spouse % 1 == 0) & (spouse != own)

    # only reports that name the spouse are an undercount when dropped
    unresolved_ids = reporters.loc[named & ~valid, "hhidpn"].astype("int64").tolist()
    if unresolved_ids:
        logger.warning(
            "Spousal linkage: %d helper reports have no usable spouse id and were excluded",
            len(unresolved_ids),
        )

    linked = pd.Series(named[valid].to_numpy(), index=spouse[valid].astype("int64").to_numpy())
    mapping = linked.groupby(level=0).any().astype("boolean")
    mapping.index.name = "hhidpn"
    mapping.name = "spousal_caregiver"

    unmatched = int((~mapping.index.isin(df["hhidpn"].astype("int64"))).sum())
    if unmatched:
        logger.warning("Spousal linkage: %d spouse ids have no record in the joined data", unmatched)
    logger.info(
        "Spousal linkage: %d of %d helper reports linked (%d name the spouse)",
        int(valid.sum()), len(reporters), int((named & valid).sum()),
    )
    return SpouseLinkage(mapping=mapping, unresolved=len(unresolved_ids), unresolved_ids=unresolved_ids, unmatched=unmatched)


def attach_spousal_caregiver(df: pd.DataFrame, linkage: SpouseLinkage) -> pd.DataFrame:
    """Left-join the linkage onto every record; unlinked records are unknown."""
    right = linkage.mapping.reset_index()
    right["hhidpn"] = right["hhidpn"].astype(df["hhidpn"].dtype)
    base = df.drop(columns=["spousal_caregiver"], errors="ignore")
    out = base.merge(right, on="hhidpn", how="left", validate="one_to_one")
    out["spousal_caregiver"] = out["spousal_caregiver"].astype("boolean")
    return out
