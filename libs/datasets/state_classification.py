import numpy as np
import pandas as pd
import structlog

from commondata.common_fields import Category
from commondata.common_fields import CommonFields
from libs.datasets import join_result


_log = structlog.get_logger()


# Columns of the classified states table, before population is added.
CLASSIFIED_STATE_FIELDS = [
    CommonFields.STATE,
    CommonFields.CLINTON_VOTES,
    CommonFields.TRUMP_VOTES,
    CommonFields.CASES,
    CommonFields.TRUMP_VOTE_SHARE,
    CommonFields.CATEGORY,
]


class NoTwoPartyVotesError(ValueError):
    """Raised when the vote share of a state can not be calculated because it has no votes."""


def join_votes_and_snapshot(votes: pd.DataFrame, snapshot: pd.DataFrame) -> join_result.JoinResult:
    """Joins per-state vote totals with the COVID snapshot on the state name.

    Args:
        votes: output of `vote_totals.pivot_candidate_votes`
        snapshot: output of `snapshot.select_snapshot`
    """
    return join_result.inner_join(
        votes, snapshot, name="votes-covid_snapshot", validate="one_to_one"
    )


def trump_vote_share(data: pd.DataFrame) -> pd.Series:
    """Returns the fraction of the two-party vote won by Trump in each row of `data`.

    Raises:
        NoTwoPartyVotesError: if a row has no votes for either candidate.
    """
    total = data[CommonFields.TRUMP_VOTES] + data[CommonFields.CLINTON_VOTES]
    no_votes = total == 0
    if no_votes.any():
        raise NoTwoPartyVotesError(
            f"No two-party votes in {data.loc[no_votes, CommonFields.STATE].tolist()}"
        )
    return data[CommonFields.TRUMP_VOTES] / total


def classify_vote_share(share: pd.Series) -> pd.Series:
    """Maps each vote share to the Category that won the majority, Category.TIE at exactly 0.5."""
    category = np.select(
        [share > 0.5, share < 0.5],
        [Category.TRUMP.value, Category.CLINTON.value],
        default=Category.TIE.value,
    )
    return pd.Series(category, index=share.index, name=CommonFields.CATEGORY)


def classify_states(joined: pd.DataFrame) -> pd.DataFrame:
    """Adds the Trump vote share and the category of each state in `joined`.

    Args:
        joined: the matched rows of `join_votes_and_snapshot`

    Returns: DataFrame with columns CLASSIFIED_STATE_FIELDS.
    """
    data = joined.copy()
    data[CommonFields.TRUMP_VOTE_SHARE] = trump_vote_share(data)
    data[CommonFields.CATEGORY] = classify_vote_share(data[CommonFields.TRUMP_VOTE_SHARE])

    is_tie = data[CommonFields.CATEGORY] == Category.TIE.value
    if is_tie.any():
        _log.warning(
            "States with exactly half of the two-party vote are not assigned to either side",
            states=data.loc[is_tie, CommonFields.STATE].tolist(),
        )
    return data.loc[:, CLASSIFIED_STATE_FIELDS].reset_index(drop=True)


def join_population(classified: pd.DataFrame, population: pd.DataFrame) -> join_result.JoinResult:
    """Joins classified states with population estimates on the state name."""
    return join_result.inner_join(
        classified,
        population.loc[:, [CommonFields.STATE, CommonFields.POPULATION]],
        name="classified_states-population",
        validate="one_to_one",
    )
