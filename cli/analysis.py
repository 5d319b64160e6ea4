import logging
import pathlib
from typing import Optional

import click

from commondata.common_fields import CommonFields
from libs.analysis import plotting
from libs.datasets import dataset_utils
from libs.datasets import vote_totals
from libs.pipelines import red_blue_pipeline

_logger = logging.getLogger(__name__)


@click.group("analysis")
def main():
    pass


@main.command()
@click.option(
    "--election-csv",
    envvar="ELECTION_CSV_PATH",
    type=pathlib.Path,
    default=dataset_utils.ELECTION_CSV_PATH,
    show_default=True,
    help="MEDSL 1976-2016 presidential election results CSV",
)
@click.option(
    "--population-csv",
    envvar="POPULATION_CSV_PATH",
    type=pathlib.Path,
    default=dataset_utils.POPULATION_CSV_PATH,
    show_default=True,
    help="Census nst-est2019-alldata CSV",
)
@click.option(
    "--covid-url",
    envvar="COVID_CSV_URL",
    default=dataset_utils.NYTIMES_US_STATES_URL,
    show_default=True,
    help="URL or path of the NYTimes us-states CSV",
)
@click.option("--year", type=int, default=vote_totals.ELECTION_YEAR, show_default=True)
@click.option(
    "--output-path",
    "-o",
    type=pathlib.Path,
    default=red_blue_pipeline.DEFAULT_OUTPUT_PATH,
    show_default=True,
    help="Where the chart image is written",
)
@click.option("--width", type=float, default=plotting.DEFAULT_WIDTH, show_default=True, help="Inches")
@click.option(
    "--height", type=float, default=plotting.DEFAULT_HEIGHT, show_default=True, help="Inches"
)
@click.option("--dpi", type=int, default=plotting.DEFAULT_DPI, show_default=True)
@click.option(
    "--smooth/--no-smooth", is_flag=True, default=True, help="Draw a LOWESS trend over each line"
)
@click.option(
    "--strict-joins/--no-strict-joins",
    is_flag=True,
    default=False,
    help="Fail instead of excluding states that are missing from one of the sources",
)
@click.option("--report-path", type=pathlib.Path, help="Write the statistical tests as JSON")
@click.option("--summary-csv-path", type=pathlib.Path, help="Write the daily summary as CSV")
def run(
    election_csv: pathlib.Path,
    population_csv: pathlib.Path,
    covid_url: str,
    year: int,
    output_path: pathlib.Path,
    width: float,
    height: float,
    dpi: int,
    smooth: bool,
    strict_joins: bool,
    report_path: Optional[pathlib.Path],
    summary_csv_path: Optional[pathlib.Path],
):
    """Compare COVID-19 cases in states won by Trump and by Clinton in the 2016 election."""
    config = red_blue_pipeline.PipelineConfig(
        election_location=election_csv,
        covid_location=covid_url,
        population_location=population_csv,
        election_year=year,
        strict_joins=strict_joins,
        output_path=output_path,
        width=width,
        height=height,
        dpi=dpi,
        smooth=smooth,
        report_path=report_path,
        summary_csv_path=summary_csv_path,
    )
    result = red_blue_pipeline.run(config)

    t_test = result.t_test
    click.echo(f"Snapshot date: {result.as_of.date().isoformat()}")
    for _, row in result.category_summary.iterrows():
        click.echo(
            f"{row[CommonFields.CATEGORY]}: {row[CommonFields.STATE_COUNT]} states, "
            f"{row[CommonFields.TOTAL_CASES]} cases"
        )
    click.echo(f"Welch t-test of cases: t={t_test.statistic:.4g} p={t_test.p_value:.4g}")
    for regression in [result.regression, result.regression_with_population]:
        click.echo(f"{regression.formula} (n={regression.n_observations})")
        for term, coefficient in regression.coefficients.items():
            click.echo(
                f"  {term}: {coefficient.estimate:.6g} "
                f"(se {coefficient.std_error:.4g}, p {coefficient.p_value:.4g})"
            )
    _logger.info("Finished analysis")
