import io

import pandas as pd
import structlog

from commondata import common_df
from commondata.common_fields import Category
from commondata.common_fields import CommonFields


def test_read_csv_strips_whitespace():
    data = common_df.read_csv(io.StringIO("date,state,cases\n2020-03-01, Ohio ,3\n"), parse_dates=True)

    assert data["state"].tolist() == ["Ohio"]
    assert data["date"].tolist() == [pd.Timestamp("2020-03-01")]


def test_write_csv_sorts_rows_and_columns(tmp_path):
    df = pd.DataFrame(
        {
            CommonFields.STANDARD_ERROR: [0.5, None],
            CommonFields.MEAN_PERCENT_INFECTED: [1.0, 2.0],
            CommonFields.CATEGORY: ["Trump", "Clinton"],
            CommonFields.DATE: pd.to_datetime(["2020-03-02", "2020-03-01"]),
        }
    )
    path = tmp_path / "summary.csv"

    common_df.write_csv(
        df, path, structlog.get_logger(), index_names=[CommonFields.DATE, CommonFields.CATEGORY]
    )

    assert path.read_text() == (
        "date,category,mean_percent_infected,standard_error\n"
        "2020-03-01,Clinton,2,\n"
        "2020-03-02,Trump,1,0.5\n"
    )


def test_category_is_str():
    assert str(Category.TRUMP) == "Trump"
    assert Category.get("Clinton") is Category.CLINTON
    assert Category.get("Green") is None
    assert CommonFields.get("cases") is CommonFields.CASES
