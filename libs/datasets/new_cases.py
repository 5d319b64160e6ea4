import pandas as pd
import structlog

from commondata.common_fields import CommonFields


_log = structlog.get_logger()


def add_new_cases(covid: pd.DataFrame) -> pd.DataFrame:
    """Adds previous_day_cases and new_cases columns by calculating the daily diff in cases.

    Rows are sorted by state and date. The first row of each state has no previous day so its
    previous_day_cases and new_cases are NaN. Negative diffs, from cumulative counts that were
    revised down, are kept as they are.
    """
    data = covid.sort_values([CommonFields.STATE, CommonFields.DATE]).reset_index(drop=True)
    previous_day_cases = data.groupby(CommonFields.STATE, sort=False)[CommonFields.CASES].shift(1)
    data[CommonFields.PREVIOUS_DAY_CASES] = previous_day_cases.astype(float)
    data[CommonFields.NEW_CASES] = data[CommonFields.CASES] - data[CommonFields.PREVIOUS_DAY_CASES]

    negative = data[CommonFields.NEW_CASES] < 0
    if negative.any():
        _log.info(
            "Cumulative cases decreased",
            rows=int(negative.sum()),
            states=sorted(data.loc[negative, CommonFields.STATE].unique().tolist()),
        )
    return data
