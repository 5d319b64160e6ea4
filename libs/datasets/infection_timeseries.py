import numpy as np
import pandas as pd
import structlog

from commondata.common_fields import CommonFields
from libs.datasets import join_result


_log = structlog.get_logger()


TIMESERIES_FIELDS = [
    CommonFields.STATE,
    CommonFields.DATE,
    CommonFields.CASES,
    CommonFields.PREVIOUS_DAY_CASES,
    CommonFields.NEW_CASES,
    CommonFields.CATEGORY,
    CommonFields.POPULATION,
    CommonFields.PERCENT_INFECTED,
]

DAILY_SUMMARY_FIELDS = [
    CommonFields.DATE,
    CommonFields.CATEGORY,
    CommonFields.MEAN_PERCENT_INFECTED,
    CommonFields.STANDARD_ERROR,
    CommonFields.OBSERVATION_COUNT,
]


def join_classified_states(
    covid_with_new_cases: pd.DataFrame, classified: pd.DataFrame
) -> join_result.JoinResult:
    """Joins every day of COVID history with the category and population of its state.

    Args:
        covid_with_new_cases: output of `new_cases.add_new_cases`
        classified: classified states with population
    """
    return join_result.inner_join(
        covid_with_new_cases,
        classified.loc[:, [CommonFields.STATE, CommonFields.CATEGORY, CommonFields.POPULATION]],
        name="covid_history-classified_states",
        validate="many_to_one",
    )


def add_percent_infected(joined: pd.DataFrame) -> pd.DataFrame:
    """Adds percent_infected, the new cases of a day as a percent of the state population.

    Rows without new_cases (the first report of each state) keep a NaN percent_infected.
    """
    data = joined.copy()
    data[CommonFields.PERCENT_INFECTED] = (
        data[CommonFields.NEW_CASES] / data[CommonFields.POPULATION] * 100
    )
    undefined = data[CommonFields.NEW_CASES].isna()
    if undefined.any():
        _log.info(
            "Rows without a previous day have no percent_infected",
            rows=int(undefined.sum()),
        )
    return data.loc[:, TIMESERIES_FIELDS]


def summarize_by_date_and_category(timeseries: pd.DataFrame) -> pd.DataFrame:
    """Returns the mean and standard error of percent_infected for each date and category.

    Rows with NaN percent_infected are excluded from both the mean and the count used for the
    standard error. The standard error uses the sample standard deviation so it is NaN for a
    group with one observation.

    Returns: DataFrame with columns DAILY_SUMMARY_FIELDS, sorted by date and category.
    """
    defined = timeseries[CommonFields.PERCENT_INFECTED].notna()
    if not defined.all():
        _log.info(
            "Excluding rows without percent_infected from daily summary",
            rows=int((~defined).sum()),
        )
    grouped = timeseries.loc[defined].groupby([CommonFields.DATE, CommonFields.CATEGORY])[
        CommonFields.PERCENT_INFECTED
    ]
    summary = grouped.agg(["mean", "std", "count"])
    summary = pd.DataFrame(
        {
            CommonFields.MEAN_PERCENT_INFECTED: summary["mean"],
            CommonFields.STANDARD_ERROR: summary["std"] / np.sqrt(summary["count"]),
            CommonFields.OBSERVATION_COUNT: summary["count"],
        }
    )
    return summary.reset_index().loc[:, DAILY_SUMMARY_FIELDS]
