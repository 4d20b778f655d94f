import pandas as pd
import pytest

from genomics_tools.errors import GenomicsError, UnknownMethodError
from genomics_tools.utils import to_frame


def test_to_frame_flattens_search_items():
    response = {
        "variants": [
            {"id": "V1", "referenceName": "chr1", "start": "100", "info": {"AF": ["0.5"]}},
            {"id": "V2", "referenceName": "chr2", "start": "200"},
        ],
        "nextPageToken": "abc",
    }
    df = to_frame(response, "variants.search")
    assert isinstance(df, pd.DataFrame)
    assert list(df["id"]) == ["V1", "V2"]
    assert "info.AF" in df.columns
    assert df.loc[0, "referenceName"] == "chr1"


def test_to_frame_explicit_key_and_empty_page():
    df = to_frame({"callSets": [{"id": "C1", "name": "NA12878"}]}, key="callSets")
    assert df.loc[0, "name"] == "NA12878"
    assert to_frame({}, "datasets.list").empty


def test_to_frame_unknown_method():
    with pytest.raises(UnknownMethodError):
        to_frame({"datasets": []}, "datasets.get")


def test_to_frame_error_is_a_genomics_error():
    with pytest.raises(GenomicsError):
        to_frame({}, None)
