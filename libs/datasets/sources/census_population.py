import pandas as pd
import structlog

from commondata.common_fields import CommonFields
from libs.datasets import data_source
from libs.datasets import dataset_utils

_log = structlog.get_logger()

# SUMLEV of state rows. The file also has the nation (10) and census regions (20).
STATE_SUMMARY_LEVEL = 40


class CensusPopulationDataset(data_source.DataSource):
    """Annual resident population estimates for the United States, regions and states.

    https://www2.census.gov/programs-surveys/popest/datasets/2010-2019/national/totals/
    """

    SOURCE_TYPE = "CensusPopulation"
    SOURCE_NAME = "U.S. Census Bureau, Population Division"

    DEFAULT_LOCATION = dataset_utils.POPULATION_CSV_PATH

    FIELD_MAP = {
        "SUMLEV": "summary_level",
        "NAME": CommonFields.STATE,
        "POPESTIMATE2019": CommonFields.POPULATION,
    }

    EXPECTED_FIELDS = [CommonFields.STATE, CommonFields.POPULATION]

    # Census files are not UTF-8 ("Doña Ana" in the county files).
    READ_CSV_KWARGS = {"encoding": "latin-1"}

    @classmethod
    def standardize_data(cls, data: pd.DataFrame) -> pd.DataFrame:
        if "summary_level" in data.columns:
            is_state = pd.to_numeric(data["summary_level"]) == STATE_SUMMARY_LEVEL
            if not is_state.all():
                _log.info(
                    "Dropping rows that are not states",
                    cls=cls.SOURCE_TYPE,
                    names=data.loc[~is_state, CommonFields.STATE].tolist(),
                )
            data = data.loc[is_state].drop(columns=["summary_level"])

        population = data[CommonFields.POPULATION]
        invalid = population.isna() | (population <= 0)
        if invalid.any():
            raise data_source.DataSourceError(
                f"{cls.SOURCE_TYPE} has missing or non-positive population for "
                f"{data.loc[invalid, CommonFields.STATE].tolist()}"
            )
        dataset_utils.check_index_values_are_unique(data, index=[CommonFields.STATE])
        return data.reset_index(drop=True)
