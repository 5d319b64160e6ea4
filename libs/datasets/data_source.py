import io
import pathlib
from typing import ClassVar, List, Mapping, Optional, Union

import pandas as pd
import requests
import structlog

from commondata import common_df
from commondata.common_fields import CommonFields
from commondata.common_fields import FieldName

_log = structlog.get_logger()


PathOrUrl = Union[pathlib.Path, str]


class DataSourceError(ValueError):
    """Raised when a source is loaded but does not contain what the analysis needs."""


def _is_url(location: PathOrUrl) -> bool:
    return isinstance(location, str) and location.startswith(("http://", "https://"))


class DataSource(object):
    """Represents a single tabular source; loads a CSV and produces a DataFrame of CommonFields."""

    # DataSource class name
    SOURCE_TYPE: ClassVar[str]
    SOURCE_NAME: ClassVar[Optional[str]] = None
    SOURCE_URL: ClassVar[Optional[str]] = None

    # Default path or URL passed to `make_dataset`.
    DEFAULT_LOCATION: ClassVar[Optional[PathOrUrl]] = None

    # Map from raw column name to the common field it is renamed to. Raw columns not in this
    # map are dropped.
    FIELD_MAP: ClassVar[Mapping[str, FieldName]]

    # Fields that must be present after renaming.
    EXPECTED_FIELDS: ClassVar[List[FieldName]]

    # Keyword arguments passed to `pd.read_csv`.
    READ_CSV_KWARGS: ClassVar[Mapping] = {}

    @classmethod
    def _load_data(cls, location: PathOrUrl) -> pd.DataFrame:
        """Loads the raw CSV, override to inject data in a test."""
        if _is_url(location):
            _log.info("Fetching", cls=cls.SOURCE_TYPE, url=location)
            response = requests.get(location)
            response.raise_for_status()
            return common_df.read_csv(io.BytesIO(response.content), **cls.READ_CSV_KWARGS)
        _log.info("Reading", cls=cls.SOURCE_TYPE, path=str(location))
        return common_df.read_csv(location, **cls.READ_CSV_KWARGS)

    @classmethod
    def _check_and_removed_unexpected_data(cls, data: pd.DataFrame) -> pd.DataFrame:
        data = data.rename(columns=dict(cls.FIELD_MAP))
        expected_fields = pd.Index(cls.EXPECTED_FIELDS)
        missing_fields = expected_fields.difference(data.columns)
        if not missing_fields.empty:
            raise DataSourceError(
                f"{cls.SOURCE_TYPE} is missing expected fields {[str(f) for f in missing_fields]}"
            )
        extra_fields = data.columns.difference(list(cls.FIELD_MAP.values()))
        if not extra_fields.empty:
            _log.debug(
                "DataSource produced extra unexpected fields, which were dropped.",
                cls=cls.SOURCE_TYPE,
                extra_fields=extra_fields.tolist(),
            )
        present_fields = [field for field in cls.FIELD_MAP.values() if field in data.columns]
        return data.loc[:, present_fields]

    @classmethod
    def standardize_data(cls, data: pd.DataFrame) -> pd.DataFrame:
        """Hook for subclasses to clean up data after it has been renamed to CommonFields."""
        return data

    @classmethod
    def make_dataset(cls, location: Optional[PathOrUrl] = None) -> pd.DataFrame:
        """Loads the source at `location`, or `DEFAULT_LOCATION`, and returns CommonFields columns.

        Raises:
            DataSourceError: when the loaded data is missing expected fields or is invalid.
        """
        location = location or cls.DEFAULT_LOCATION
        assert location, f"No location for {cls}"
        data = cls._load_data(location)
        data = cls._check_and_removed_unexpected_data(data)
        data = cls.standardize_data(data)
        _log.info(
            "Loaded",
            cls=cls.SOURCE_TYPE,
            rows=len(data),
            states=data[CommonFields.STATE].nunique(),
        )
        return data
