import pathlib
from typing import List, Optional

import pandas as pd
import structlog

from commondata.common_fields import CommonFields


_log = structlog.get_logger()


REPO_ROOT = pathlib.Path(__file__).parent.parent.parent

DATA_DIRECTORY = REPO_ROOT / "data"

# MIT Election Data and Science Lab, U.S. President 1976-2016.
# https://dataverse.harvard.edu/dataset.xhtml?persistentId=doi:10.7910/DVN/42MVDX
ELECTION_CSV_PATH = DATA_DIRECTORY / "1976-2016-president.csv"

# Census Bureau vintage 2019 state population estimates.
# https://www2.census.gov/programs-surveys/popest/datasets/2010-2019/national/totals/
POPULATION_CSV_PATH = DATA_DIRECTORY / "nst-est2019-alldata.csv"

NYTIMES_US_STATES_URL = (
    "https://raw.githubusercontent.com/nytimes/covid-19-data/master/us-states.csv"
)


class DuplicateValuesForIndex(Exception):
    def __init__(self, index, duplicate_data):
        self.index = index
        self.data = duplicate_data
        super().__init__(f"Duplicate values for index {index}:\n{format_sample_of_df(duplicate_data)}")


def format_sample_of_df(df: pd.DataFrame) -> str:
    """Formats a sample of a DataFrame as a string, suitable for dumping to a log."""
    return df.to_string(
        line_width=120, max_rows=10, max_cols=5, max_colwidth=40, show_dimensions=True
    )


def check_index_values_are_unique(
    data: pd.DataFrame, index: Optional[List[str]] = None, duplicates_as_error=True
) -> Optional[pd.DataFrame]:
    """Checks index for duplicate rows.

    Args:
        data: DataFrame to check
        index: optional index to use. If not specified, uses index from `data`.
        duplicates_as_error: If True, raises an error if duplicates are found:
            otherwise logs a warning.

    Returns: the duplicated rows when `duplicates_as_error` is False, otherwise None.
    """
    if index:
        data = data.set_index(index)

    duplicates = data.index.duplicated(keep=False)
    duplicated_data = data[duplicates]
    if duplicates.any() and duplicates_as_error:
        raise DuplicateValuesForIndex(data.index.names, duplicated_data)
    elif duplicates.any():
        _log.warning("Found duplicate index values", count=int(duplicates.sum()))
        return duplicated_data
    return None


def states_in(data: pd.DataFrame) -> List[str]:
    """Returns the sorted unique state names in `data`, for logging."""
    return sorted(data[CommonFields.STATE].dropna().unique().tolist())
