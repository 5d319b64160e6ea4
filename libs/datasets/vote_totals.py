from typing import Mapping

import pandas as pd
import structlog

from commondata.common_fields import Category
from commondata.common_fields import CommonFields


_log = structlog.get_logger()


ELECTION_YEAR = 2016

# Candidate names exactly as they appear in the election results. Matching is case and
# punctuation sensitive.
DEFAULT_CANDIDATES: Mapping[Category, str] = {
    Category.TRUMP: "Trump, Donald J.",
    Category.CLINTON: "Clinton, Hillary",
}

# Wide vote column of each category after pivoting.
CATEGORY_VOTES_FIELD: Mapping[Category, CommonFields] = {
    Category.TRUMP: CommonFields.TRUMP_VOTES,
    Category.CLINTON: CommonFields.CLINTON_VOTES,
}


def reduce_election_results(
    results: pd.DataFrame,
    year: int = ELECTION_YEAR,
    candidates: Mapping[Category, str] = DEFAULT_CANDIDATES,
) -> pd.DataFrame:
    """Returns total votes of each candidate in each state for one presidential race.

    Rows of a state and candidate that repeat (a candidate on several ballot lines) are summed.

    Args:
        results: DataFrame of election results with year, state, candidate and
            candidate_votes columns.
        year: the election year to keep.
        candidates: the candidate names to keep.

    Returns: DataFrame with one row per (state, candidate) and columns state, candidate and
        candidate_votes.
    """
    in_year = results.loc[results[CommonFields.YEAR] == year]
    candidate_names = list(candidates.values())
    selected = in_year.loc[in_year[CommonFields.CANDIDATE].isin(candidate_names)]

    found_names = set(selected[CommonFields.CANDIDATE].unique())
    for name in candidate_names:
        if name not in found_names:
            _log.warning("Candidate not found in election results", candidate=name, year=year)

    return selected.groupby([CommonFields.STATE, CommonFields.CANDIDATE], as_index=False)[
        CommonFields.CANDIDATE_VOTES
    ].sum()


def pivot_candidate_votes(
    votes: pd.DataFrame, candidates: Mapping[Category, str] = DEFAULT_CANDIDATES
) -> pd.DataFrame:
    """Pivots output of `reduce_election_results` to one row per state.

    Returns: DataFrame with columns state, clinton_votes and trump_votes. A state without a row
        for one of the candidates gets 0 votes for that candidate.
    """
    wide = votes.pivot(
        index=CommonFields.STATE, columns=CommonFields.CANDIDATE, values=CommonFields.CANDIDATE_VOTES
    )
    columns = {}
    for category, name in candidates.items():
        field = CATEGORY_VOTES_FIELD[category]
        if name in wide.columns:
            columns[field] = wide[name]
        else:
            columns[field] = pd.Series(float("nan"), index=wide.index)
    wide = pd.DataFrame(columns, index=wide.index)

    missing = wide.isna().any(axis=1)
    if missing.any():
        _log.warning(
            "States without votes for a candidate, counting them as 0",
            states=wide.index[missing].tolist(),
        )
    wide = wide.fillna(0).astype("int64")
    wide.columns.name = None
    return wide.reset_index()
