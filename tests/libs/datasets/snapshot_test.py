import pandas as pd
import pytest
import structlog

from commondata.common_fields import CommonFields
from libs.datasets import dataset_utils
from libs.datasets import snapshot
from tests import test_helpers


def test_latest_date_is_global_max():
    covid = test_helpers.covid_rows(
        ["2020-03-01,Ohio,1", "2020-03-03,Ohio,5", "2020-03-02,Utah,2", "2020-02-28,Utah,1"]
    )
    assert snapshot.latest_date(covid) == pd.Timestamp("2020-03-03")


def test_latest_date_of_empty_dataset():
    with pytest.raises(ValueError):
        snapshot.latest_date(test_helpers.covid_rows([]))


def test_select_snapshot_one_row_per_reporting_state():
    covid = test_helpers.covid_rows(
        [
            "2020-03-01,Ohio,1",
            "2020-03-02,Ohio,5",
            "2020-03-01,Texas,3",
            "2020-03-02,Texas,4",
            "2020-03-01,Utah,2",
        ]
    )
    as_of = snapshot.latest_date(covid)

    with structlog.testing.capture_logs() as logs:
        result = snapshot.select_snapshot(covid, as_of)

    assert result[CommonFields.STATE].tolist() == ["Ohio", "Texas"]
    assert (result[CommonFields.DATE] == as_of).all()
    assert result[CommonFields.CASES].tolist() == [5, 4]
    # Utah did not report on the latest date so it is excluded, with a log message.
    assert logs[0]["states"] == ["Utah"]
    assert logs[0]["as_of"] == "2020-03-02"


def test_select_snapshot_rejects_duplicate_state_rows():
    covid = test_helpers.covid_rows(["2020-03-02,Ohio,5", "2020-03-02,Ohio,6"])
    with pytest.raises(dataset_utils.DuplicateValuesForIndex):
        snapshot.select_snapshot(covid, pd.Timestamp("2020-03-02"))
