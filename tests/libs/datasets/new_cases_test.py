import numpy as np
import structlog

from commondata.common_fields import CommonFields
from libs.datasets import new_cases
from tests import test_helpers


def test_new_cases_first_day_undefined():
    covid = test_helpers.covid_rows(
        ["2020-03-03,Ohio,15", "2020-03-01,Ohio,10", "2020-03-02,Ohio,15"]
    )
    result = new_cases.add_new_cases(covid)

    assert result[CommonFields.DATE].dt.day.tolist() == [1, 2, 3]
    np.testing.assert_array_equal(result[CommonFields.NEW_CASES], [np.nan, 5, 0])
    np.testing.assert_array_equal(result[CommonFields.PREVIOUS_DAY_CASES], [np.nan, 10, 15])


def test_new_cases_per_state():
    covid = test_helpers.covid_rows(
        ["2020-03-01,Ohio,10", "2020-03-01,Utah,1", "2020-03-02,Ohio,12", "2020-03-02,Utah,4"]
    )
    result = new_cases.add_new_cases(covid).set_index([CommonFields.STATE, CommonFields.DATE])

    ohio = result.xs("Ohio", level=CommonFields.STATE)
    utah = result.xs("Utah", level=CommonFields.STATE)
    np.testing.assert_array_equal(ohio[CommonFields.NEW_CASES], [np.nan, 2])
    np.testing.assert_array_equal(utah[CommonFields.NEW_CASES], [np.nan, 3])


def test_new_cases_keeps_negative_values():
    covid = test_helpers.covid_rows(
        ["2020-03-01,Ohio,100", "2020-03-02,Ohio,50", "2020-03-03,Ohio,75"]
    )
    with structlog.testing.capture_logs() as logs:
        result = new_cases.add_new_cases(covid)

    np.testing.assert_array_equal(result[CommonFields.NEW_CASES], [np.nan, -50, 25])
    assert logs[0]["states"] == ["Ohio"]
