"""Compares COVID-19 cases in states that voted for Trump and for Clinton in 2016.

The pipeline is a sequence of functions that each take DataFrames and return new DataFrames:
load the three sources, reduce election results to per-state vote totals, select the most
recent COVID-19 snapshot, classify states by vote majority, add population, build daily
infection rates and summarize them by category, then run the statistical tests and draw the
chart.
"""
from typing import List, Mapping, Optional, Tuple
import dataclasses
import pathlib

import pandas as pd
import structlog

from api.analysis_report_definition import AnalysisReport
from api.analysis_report_definition import JoinExclusions
from api.analysis_report_definition import Regression
from api.analysis_report_definition import TTest
from commondata import common_df
from commondata.common_fields import Category
from commondata.common_fields import CommonFields
from libs import timing_utils
from libs.analysis import plotting
from libs.analysis import statistical_tests
from libs.datasets import dataset_utils
from libs.datasets import infection_timeseries
from libs.datasets import join_result
from libs.datasets import new_cases
from libs.datasets import snapshot
from libs.datasets import state_classification
from libs.datasets import vote_totals
from libs.datasets.data_source import PathOrUrl
from libs.datasets.sources.census_population import CensusPopulationDataset
from libs.datasets.sources.election_results import ElectionResultsDataset
from libs.datasets.sources.nytimes_dataset import NYTimesDataset


_log = structlog.get_logger()


DEFAULT_OUTPUT_PATH = pathlib.Path("covid_red_blue.png")


@dataclasses.dataclass(frozen=True)
class PipelineConfig:
    election_location: PathOrUrl = dataset_utils.ELECTION_CSV_PATH
    covid_location: PathOrUrl = dataset_utils.NYTIMES_US_STATES_URL
    population_location: PathOrUrl = dataset_utils.POPULATION_CSV_PATH

    election_year: int = vote_totals.ELECTION_YEAR
    candidates: Mapping[Category, str] = dataclasses.field(
        default_factory=lambda: dict(vote_totals.DEFAULT_CANDIDATES)
    )

    # If True, a state in only one of the election, COVID-19 snapshot and population sources
    # stops the run instead of being logged and excluded.
    strict_joins: bool = False

    output_path: pathlib.Path = DEFAULT_OUTPUT_PATH
    width: float = plotting.DEFAULT_WIDTH
    height: float = plotting.DEFAULT_HEIGHT
    dpi: int = plotting.DEFAULT_DPI
    smooth: bool = True

    # Optional JSON report of the statistical tests.
    report_path: Optional[pathlib.Path] = None
    # Optional CSV of the daily summary plotted in the chart.
    summary_csv_path: Optional[pathlib.Path] = None


@dataclasses.dataclass(frozen=True)
class SourceData:
    election: pd.DataFrame
    covid: pd.DataFrame
    population: pd.DataFrame

    @staticmethod
    def load(config: PipelineConfig) -> "SourceData":
        with timing_utils.time("load sources"):
            return SourceData(
                election=ElectionResultsDataset.make_dataset(config.election_location),
                covid=NYTimesDataset.make_dataset(config.covid_location),
                population=CensusPopulationDataset.make_dataset(config.population_location),
            )


@dataclasses.dataclass(frozen=True)
class AnalysisResult:
    election_year: int

    # Most recent date in the COVID-19 data.
    as_of: pd.Timestamp

    # One row per state with votes, snapshot cases, category and population.
    classified: pd.DataFrame

    # One row per state and date.
    timeseries: pd.DataFrame

    # One row per date and category.
    daily_summary: pd.DataFrame

    category_summary: pd.DataFrame
    t_test: statistical_tests.TTestResult
    regression: statistical_tests.RegressionResult
    regression_with_population: statistical_tests.RegressionResult

    joins: List[join_result.JoinResult]

    def to_report(self) -> AnalysisReport:
        return AnalysisReport(
            snapshot_date=self.as_of.date(),
            election_year=self.election_year,
            categories=AnalysisReport.category_summaries(self.category_summary),
            cases_t_test=TTest.from_result(self.t_test),
            cases_by_vote_share=Regression.from_result(self.regression),
            cases_by_vote_share_and_population=Regression.from_result(
                self.regression_with_population
            ),
            join_exclusions=[
                JoinExclusions(
                    name=join.name,
                    left_only=[str(key) for key in join.left_only_keys],
                    right_only=[str(key) for key in join.right_only_keys],
                )
                for join in self.joins
            ],
        )


def classify(
    sources: SourceData, config: PipelineConfig
) -> Tuple[pd.Timestamp, pd.DataFrame, List[join_result.JoinResult]]:
    """Returns the snapshot date, the classified states with population and the joins used."""
    votes = vote_totals.reduce_election_results(
        sources.election, year=config.election_year, candidates=config.candidates
    )
    votes = vote_totals.pivot_candidate_votes(votes, candidates=config.candidates)

    as_of = snapshot.latest_date(sources.covid)
    covid_snapshot = snapshot.select_snapshot(sources.covid, as_of)

    votes_join = state_classification.join_votes_and_snapshot(votes, covid_snapshot)
    classified = state_classification.classify_states(votes_join.resolve(config.strict_joins))

    population_join = state_classification.join_population(classified, sources.population)
    classified = population_join.resolve(config.strict_joins)
    return as_of, classified, [votes_join, population_join]


def build_timeseries(
    covid: pd.DataFrame, classified: pd.DataFrame
) -> Tuple[pd.DataFrame, join_result.JoinResult]:
    """Returns the daily infection rate of every classified state and the join used."""
    covid_join = infection_timeseries.join_classified_states(
        new_cases.add_new_cases(covid), classified
    )
    # COVID-19 history of states that were not classified, such as territories, is expected
    # here; those states were already reported by the joins in `classify`.
    timeseries = infection_timeseries.add_percent_infected(covid_join.ignore_unmatched())
    return timeseries, covid_join


def analyze(sources: SourceData, config: PipelineConfig) -> AnalysisResult:
    with timing_utils.time("classify states"):
        as_of, classified, joins = classify(sources, config)
    _log.info(
        "Classified states",
        as_of=as_of.date().isoformat(),
        states=len(classified),
        categories=classified[CommonFields.CATEGORY].value_counts().to_dict(),
    )

    with timing_utils.time("build timeseries"):
        timeseries, covid_join = build_timeseries(sources.covid, classified)
        daily_summary = infection_timeseries.summarize_by_date_and_category(timeseries)

    category_summary = statistical_tests.summarize_categories(classified)
    t_test = statistical_tests.compare_category_means(classified)
    regression = statistical_tests.regress(classified)
    regression_with_population = statistical_tests.regress(
        classified, controls=[CommonFields.POPULATION]
    )
    return AnalysisResult(
        election_year=config.election_year,
        as_of=as_of,
        classified=classified,
        timeseries=timeseries,
        daily_summary=daily_summary,
        category_summary=category_summary,
        t_test=t_test,
        regression=regression,
        regression_with_population=regression_with_population,
        joins=joins + [covid_join],
    )


def write_outputs(result: AnalysisResult, config: PipelineConfig) -> None:
    fig = plotting.plot_daily_infection_rates(result.daily_summary, smooth=config.smooth)
    plotting.save_figure(
        fig, config.output_path, width=config.width, height=config.height, dpi=config.dpi
    )
    if config.report_path:
        config.report_path.write_text(result.to_report().model_dump_json(indent=2))
        _log.info("Wrote report", path=str(config.report_path))
    if config.summary_csv_path:
        common_df.write_csv(
            result.daily_summary,
            config.summary_csv_path,
            _log,
            index_names=[CommonFields.DATE, CommonFields.CATEGORY],
        )


def run(config: PipelineConfig, sources: Optional[SourceData] = None) -> AnalysisResult:
    """Loads the sources, unless `sources` is given, analyzes them and writes the outputs."""
    if sources is None:
        sources = SourceData.load(config)
    result = analyze(sources, config)
    write_outputs(result, config)
    return result
