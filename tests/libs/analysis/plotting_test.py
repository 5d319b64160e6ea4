import matplotlib.image
import pandas as pd

from commondata.common_fields import CommonFields
from libs.analysis import plotting
from tests import test_helpers


def _daily_summary():
    rows = []
    for day, date in enumerate(pd.date_range("2020-04-01", periods=10)):
        rows.append(f"{date.date()},Trump,{0.01 * day},0.001")
        rows.append(f"{date.date()},Clinton,{0.02 * day},0.002")
    return test_helpers.read_csv(
        "date,category,mean_percent_infected,standard_error\n" + "\n".join(rows) + "\n",
        parse_dates=True,
    )


def test_plot_one_line_per_category():
    fig = plotting.plot_daily_infection_rates(_daily_summary(), smooth=False)
    ax = fig.axes[0]

    labels = [line.get_label() for line in ax.get_lines()]
    assert labels == ["Clinton", "Trump"]
    colors = {line.get_label(): line.get_color() for line in ax.get_lines()}
    assert colors == {"Clinton": "blue", "Trump": "red"}
    assert ax.get_title() == plotting.TITLE
    assert ax.get_ylabel() == "Percent of Confirmed Infections In America"


def test_plot_with_trend_lines():
    fig = plotting.plot_daily_infection_rates(_daily_summary(), smooth=True)
    # A data line and a trend line for each category.
    assert len(fig.axes[0].get_lines()) == 4


def test_save_figure_size(tmp_path):
    fig = plotting.plot_daily_infection_rates(_daily_summary())
    path = tmp_path / "chart.png"

    plotting.save_figure(fig, path, width=6, height=4, dpi=20)

    image = matplotlib.image.imread(path)
    assert image.shape[:2] == (4 * 20, 6 * 20)
