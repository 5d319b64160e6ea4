import math

import numpy as np
import pandas as pd
import pytest
import structlog

from commondata.common_fields import Category
from commondata.common_fields import CommonFields
from libs.datasets import infection_timeseries
from libs.datasets import new_cases
from tests import test_helpers


def _classified():
    return test_helpers.read_csv(
        "state,category,population\nRed State,Trump,1000000\nBlue State,Clinton,500000\n"
    )


def test_build_percent_infected():
    covid = new_cases.add_new_cases(
        test_helpers.covid_rows(
            [
                "2020-03-01,Red State,50",
                "2020-03-02,Red State,100",
                "2020-03-01,Blue State,20",
                "2020-03-02,Blue State,50",
                "2020-03-02,Guam,3",
            ]
        )
    )
    join = infection_timeseries.join_classified_states(covid, _classified())
    assert join.left_only_keys == ["Guam"]

    with structlog.testing.capture_logs() as logs:
        timeseries = infection_timeseries.add_percent_infected(join.matched)

    assert list(timeseries.columns) == infection_timeseries.TIMESERIES_FIELDS
    by_state = timeseries.set_index([CommonFields.STATE, CommonFields.DATE])
    red = by_state.xs("Red State", level=CommonFields.STATE)
    blue = by_state.xs("Blue State", level=CommonFields.STATE)
    assert math.isnan(red[CommonFields.PERCENT_INFECTED].iloc[0])
    assert red[CommonFields.PERCENT_INFECTED].iloc[1] == pytest.approx(0.005)
    assert blue[CommonFields.PERCENT_INFECTED].iloc[1] == pytest.approx(0.006)
    assert (red[CommonFields.CATEGORY] == Category.TRUMP.value).all()
    assert logs[0]["rows"] == 2


def _timeseries(rows):
    return test_helpers.read_csv(
        "date,state,category,percent_infected\n" + "\n".join(rows) + "\n", parse_dates=True
    )


def test_summarize_mean_and_standard_error():
    timeseries = _timeseries(
        [
            "2020-04-01,A,Trump,1.0",
            "2020-04-01,B,Trump,2.0",
            "2020-04-01,C,Trump,3.0",
            "2020-04-01,D,Clinton,4.0",
        ]
    )
    summary = infection_timeseries.summarize_by_date_and_category(timeseries)

    assert list(summary.columns) == infection_timeseries.DAILY_SUMMARY_FIELDS
    trump = summary.set_index(CommonFields.CATEGORY).loc[Category.TRUMP.value]
    assert trump[CommonFields.MEAN_PERCENT_INFECTED] == pytest.approx(2.0)
    assert trump[CommonFields.STANDARD_ERROR] == pytest.approx(1 / np.sqrt(3))
    assert trump[CommonFields.STANDARD_ERROR] == pytest.approx(0.577, abs=1e-3)
    assert trump[CommonFields.OBSERVATION_COUNT] == 3

    clinton = summary.set_index(CommonFields.CATEGORY).loc[Category.CLINTON.value]
    # Sample standard deviation of one observation is not defined.
    assert math.isnan(clinton[CommonFields.STANDARD_ERROR])


def test_summarize_excludes_undefined_rows():
    timeseries = _timeseries(
        [
            "2020-04-01,A,Trump,",
            "2020-04-02,A,Trump,1.0",
            "2020-04-02,B,Trump,",
            "2020-04-02,C,Trump,3.0",
        ]
    )
    with structlog.testing.capture_logs() as logs:
        summary = infection_timeseries.summarize_by_date_and_category(timeseries)

    # 2020-04-01 has no defined values so there is no row for it.
    assert summary[CommonFields.DATE].tolist() == [pd.Timestamp("2020-04-02")]
    assert summary[CommonFields.MEAN_PERCENT_INFECTED].tolist() == [2.0]
    assert summary[CommonFields.OBSERVATION_COUNT].tolist() == [2]
    assert summary[CommonFields.STANDARD_ERROR].iloc[0] == pytest.approx(1.0)
    assert logs[0]["rows"] == 2
