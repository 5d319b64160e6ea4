import pathlib
from typing import Mapping

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import pandas as pd
import structlog
from statsmodels.nonparametric.smoothers_lowess import lowess

from commondata.common_fields import Category
from commondata.common_fields import CommonFields


_log = structlog.get_logger()


CATEGORY_COLORS: Mapping[str, str] = {
    Category.CLINTON.value: "blue",
    Category.TRUMP.value: "red",
    Category.TIE.value: "gray",
}

TITLE = "Daily Confirmed COVID-19 Infections In Red and Blue States"
X_LABEL = "Date"
Y_LABEL = "Percent of Confirmed Infections In America"

# Width and height in inches of the saved chart.
DEFAULT_WIDTH = 6
DEFAULT_HEIGHT = 4
DEFAULT_DPI = 300

# Fraction of the points used to fit each point of the trend line.
LOWESS_FRACTION = 0.75


def _smoothed(dates: pd.Series, values: pd.Series, frac: float = LOWESS_FRACTION):
    x = mdates.date2num(pd.to_datetime(dates).to_numpy(dtype="datetime64[ns]"))
    fitted = lowess(values.to_numpy(dtype=float), x, frac=frac, return_sorted=True)
    # x stays in matplotlib date units, which the date axis plots directly.
    return fitted[:, 0], fitted[:, 1]


def plot_daily_infection_rates(daily_summary: pd.DataFrame, smooth: bool = True) -> plt.Figure:
    """Plots mean percent_infected by date with one line per category.

    Args:
        daily_summary: output of `infection_timeseries.summarize_by_date_and_category`
        smooth: if True, a LOWESS trend is drawn over each line.
    """
    fig, ax = plt.subplots()
    for category, group in daily_summary.groupby(CommonFields.CATEGORY):
        group = group.sort_values(CommonFields.DATE)
        color = CATEGORY_COLORS.get(category, "black")
        ax.plot(
            group[CommonFields.DATE],
            group[CommonFields.MEAN_PERCENT_INFECTED],
            color=color,
            label=category,
            linewidth=0.8,
        )
        if smooth and len(group) >= 3:
            trend_x, trend_y = _smoothed(
                group[CommonFields.DATE], group[CommonFields.MEAN_PERCENT_INFECTED]
            )
            ax.plot(trend_x, trend_y, color=color, linewidth=2, alpha=0.5)

    ax.set_title(TITLE)
    ax.set_xlabel(X_LABEL)
    ax.set_ylabel(Y_LABEL)
    ax.legend(title="Category")
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%b %Y"))
    fig.autofmt_xdate()
    return fig


def save_figure(
    fig: plt.Figure,
    path: pathlib.Path,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
    dpi: int = DEFAULT_DPI,
) -> pathlib.Path:
    """Saves `fig` to `path` at `width` x `height` inches and closes it."""
    fig.set_size_inches(width, height)
    fig.tight_layout()
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
    _log.info("Saved chart", path=str(path), width=width, height=height, dpi=dpi)
    return path
