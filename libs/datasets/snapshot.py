import pandas as pd
import structlog

from commondata.common_fields import CommonFields
from libs.datasets import dataset_utils


_log = structlog.get_logger()


def latest_date(covid: pd.DataFrame) -> pd.Timestamp:
    """Returns the most recent date reported by any state."""
    if covid.empty:
        raise ValueError("Can not find the latest date of an empty dataset")
    return pd.Timestamp(covid[CommonFields.DATE].max())


def select_snapshot(covid: pd.DataFrame, as_of: pd.Timestamp) -> pd.DataFrame:
    """Returns the rows of `covid` reported on `as_of`, one per state.

    States whose most recent report is before `as_of` are not in the snapshot. They are logged
    so that a state that stopped reporting is not silently missing from the analysis.

    Raises:
        DuplicateValuesForIndex: if a state has more than one row for `as_of`.
    """
    is_as_of = covid[CommonFields.DATE] == as_of
    snapshot = covid.loc[is_as_of]
    dataset_utils.check_index_values_are_unique(snapshot, index=[CommonFields.STATE])

    stale_states = sorted(
        set(dataset_utils.states_in(covid)) - set(dataset_utils.states_in(snapshot))
    )
    if stale_states:
        _log.warning(
            "States not reporting on the snapshot date are excluded",
            as_of=as_of.date().isoformat(),
            states=stale_states,
        )
    return snapshot.reset_index(drop=True)
