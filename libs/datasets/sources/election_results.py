import pandas as pd

from commondata.common_fields import CommonFields
from libs.datasets import data_source
from libs.datasets import dataset_utils


class ElectionResultsDataset(data_source.DataSource):
    """U.S. presidential election returns by state, 1976-2016.

    One row per state, year and candidate line on the ballot. A candidate can appear on more
    than one line in a state (for example New York, where candidates run on several party
    lines), so votes must be summed per candidate.
    """

    SOURCE_TYPE = "MEDSL"
    SOURCE_NAME = "MIT Election Data and Science Lab"
    SOURCE_URL = "https://doi.org/10.7910/DVN/42MVDX"

    DEFAULT_LOCATION = dataset_utils.ELECTION_CSV_PATH

    FIELD_MAP = {
        "year": CommonFields.YEAR,
        "state": CommonFields.STATE,
        "state_fips": CommonFields.STATE_FIPS,
        "candidate": CommonFields.CANDIDATE,
        "candidatevotes": CommonFields.CANDIDATE_VOTES,
    }

    EXPECTED_FIELDS = [
        CommonFields.YEAR,
        CommonFields.STATE,
        CommonFields.CANDIDATE,
        CommonFields.CANDIDATE_VOTES,
    ]

    READ_CSV_KWARGS = {"dtype": {"state_fips": str}}

    @classmethod
    def standardize_data(cls, data: pd.DataFrame) -> pd.DataFrame:
        if data[CommonFields.CANDIDATE_VOTES].isna().any():
            raise data_source.DataSourceError(f"{cls.SOURCE_TYPE} has rows without vote counts")
        if CommonFields.STATE_FIPS in data.columns:
            data = data.assign(**{CommonFields.STATE_FIPS: data[CommonFields.STATE_FIPS].str.zfill(2)})
        return data
