"""
Shared code that handles `pandas.DataFrames` objects.
"""

import pathlib
from typing import List, TextIO, Union

import numpy as np
import pandas as pd
from structlog import stdlib

from commondata.common_fields import COMMON_FIELDS_ORDER_MAP, CommonFields


def sort_common_field_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Sort columns to match the order of CommonFields, followed by remaining columns in alphabetical order."""
    this_columns_order = {
        col: COMMON_FIELDS_ORDER_MAP.get(col, i + len(COMMON_FIELDS_ORDER_MAP))
        for i, col in enumerate(sorted(df.columns))
    }
    return df.loc[:, sorted(df.columns, key=lambda c: this_columns_order[c])]


def write_csv(
    df: pd.DataFrame, path: pathlib.Path, log: stdlib.BoundLogger, index_names: List[str]
) -> None:
    """Write `df` to `path` as a CSV with index set to `index_names` and rows and columns sorted."""
    if df.index.names != index_names:
        if df.index.names != [None]:
            df = df.reset_index(inplace=False)
        df = df.set_index(index_names, inplace=False)
    df = sort_common_field_columns(df.sort_index())
    log.info("Writing DataFrame", path=str(path), rows=len(df))
    # A column with floats and pd.NA is given type 'object' and does not get formatted by to_csv
    # float_format. Changing the pd.NA to np.nan lets convert_dtypes pick 'float64' and 'Int64'.
    df = df.replace({pd.NA: np.nan}).convert_dtypes()
    df.to_csv(path, date_format="%Y-%m-%d", index=True, float_format="%.12g")


def read_csv(
    path_or_buf: Union[pathlib.Path, str, TextIO], *, parse_dates: bool = False, **kwargs
) -> pd.DataFrame:
    """Read `path_or_buf` and return a DataFrame with whitespace stripped from string columns.

    Args:
        path_or_buf: Path to csv file, or buffer containing csv data.
        parse_dates: If True, parses the `date` column.
        kwargs: passed to `pd.read_csv`.
    """
    if parse_dates:
        kwargs["parse_dates"] = [CommonFields.DATE]
    data = pd.read_csv(path_or_buf, low_memory=False, **kwargs)
    return strip_whitespace(data)


def strip_whitespace(df: pd.DataFrame) -> pd.DataFrame:
    """Return `df` with `str.strip` applied to columns with `object` or string dtype."""

    def strip_series(col):
        if pd.api.types.is_string_dtype(col.dtype):
            return col.str.strip()
        else:
            return col

    return df.apply(strip_series, axis=0)
