import numpy as np
import pandas as pd
import pytest

from src.data.fragments import join_fragments, make_hhidpn, prepare_fragment, read_fragment
from src.errors import DuplicateRespondent, MissingInputField, PipelineError


def test_make_hhidpn():
    out = make_hhidpn(pd.Series(["010004", "010004"]), pd.Series(["010", "020"]))
    assert out.tolist() == [10004010, 10004020]


def test_missing_column_is_fatal(make_fragments):
    frags = make_fragments([{"hhid": 1, "pn": 10}])
    frags["geography"] = frags["geography"].drop(columns=["urbrur"])
    with pytest.raises(MissingInputField) as exc:
        join_fragments(**frags)
    assert exc.value.missing == ["urbrur"]
    assert "geography" in str(exc.value)


def test_missing_helper_slots_is_fatal(make_fragments):
    frags = make_fragments([{"hhid": 1, "pn": 10}])
    caregiving = frags["caregiving"].drop(columns=["iadl_helper_1"])
    with pytest.raises(MissingInputField):
        prepare_fragment(caregiving, "caregiving")


def test_duplicate_respondent_is_fatal(make_fragments):
    frags = make_fragments([{"hhid": 1, "pn": 10}, {"hhid": 2, "pn": 10}])
    frags["volunteer"] = pd.concat([frags["volunteer"], frags["volunteer"].iloc[[0]]])
    with pytest.raises(DuplicateRespondent):
        join_fragments(**frags)


def test_unusable_key_is_fatal(make_fragments):
    frags = make_fragments([{"hhid": "abc", "pn": 10}])
    with pytest.raises(PipelineError):
        prepare_fragment(frags["demographic"], "demographic")


def test_left_join_keeps_every_base_respondent(make_fragments):
    frags = make_fragments([
        {"hhid": 1, "pn": 10, "volunteer": 1},
        {"hhid": 2, "pn": 10, "volunteer": 5},
        {"hhid": 3, "pn": 10, "volunteer": 1},
    ])
    frags["volunteer"] = frags["volunteer"].iloc[[0]]
    frags["geography"] = frags["geography"].iloc[[1, 2]]
    out = join_fragments(**frags)
    assert out["hhidpn"].tolist() == [1010, 2010, 3010]
    assert out["volunteer"].iloc[0] == 1
    assert out["volunteer"].iloc[1:].isna().all()
    assert pd.isna(out["urbrur"].iloc[0])


def test_hhidpn_column_accepted():
    df = pd.DataFrame({"hhidpn": [1010], "volunteer": [1]})
    out = prepare_fragment(df, "volunteer")
    assert out.columns.tolist() == ["hhidpn", "volunteer"]


def test_read_fragment_csv(tmp_path):
    pd.DataFrame({"hhid": [1], "pn": [10], "volunteer": [np.nan]}).to_csv(tmp_path / "volunteer.csv", index=False)
    assert len(read_fragment(tmp_path, "volunteer")) == 1
    with pytest.raises(FileNotFoundError):
        read_fragment(tmp_path, "residence")
