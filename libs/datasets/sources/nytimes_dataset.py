import pandas as pd

from commondata.common_fields import CommonFields
from libs.datasets import data_source
from libs.datasets import dataset_utils


class NYTimesDataset(data_source.DataSource):
    """Cumulative COVID-19 cases and deaths by state and date, published by The New York Times."""

    SOURCE_TYPE = "NYTimes"
    SOURCE_URL = "https://github.com/nytimes/covid-19-data"

    DEFAULT_LOCATION = dataset_utils.NYTIMES_US_STATES_URL

    FIELD_MAP = {
        "date": CommonFields.DATE,
        "state": CommonFields.STATE,
        "fips": CommonFields.FIPS,
        "cases": CommonFields.CASES,
        "deaths": CommonFields.DEATHS,
    }

    EXPECTED_FIELDS = [CommonFields.DATE, CommonFields.STATE, CommonFields.CASES]

    READ_CSV_KWARGS = {"dtype": {"fips": str}, "parse_dates": True}

    @classmethod
    def standardize_data(cls, data: pd.DataFrame) -> pd.DataFrame:
        if data[CommonFields.DATE].isna().any():
            raise data_source.DataSourceError(f"{cls.SOURCE_TYPE} has rows without a date")
        if data[CommonFields.STATE].isna().any():
            raise data_source.DataSourceError(f"{cls.SOURCE_TYPE} has rows without a state")
        return data
