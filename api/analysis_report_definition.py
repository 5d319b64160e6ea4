from typing import Dict, List, Optional
import datetime

import pydantic

from commondata.common_fields import Category
from commondata.common_fields import CommonFields
from libs import base_model
from libs.analysis import statistical_tests


class GroupStats(base_model.APIBaseModel):
    mean: float = pydantic.Field(..., description="Mean value of the states in the category")
    count: int = pydantic.Field(..., description="Number of states in the category")


class TTest(base_model.APIBaseModel):
    """Welch's unequal variance t-test between two categories."""

    field: str = pydantic.Field(..., description="Compared field")
    statistic: float
    p_value: float = pydantic.Field(..., description="Two-sided p-value")
    groups: Dict[Category, GroupStats]

    @staticmethod
    def from_result(result: statistical_tests.TTestResult) -> "TTest":
        return TTest(
            field=str(result.field),
            statistic=result.statistic,
            p_value=result.p_value,
            groups={
                category: GroupStats(mean=stats.mean, count=stats.count)
                for category, stats in result.groups.items()
            },
        )


class Coefficient(base_model.APIBaseModel):
    estimate: float
    std_error: Optional[float] = None
    p_value: Optional[float] = None


class Regression(base_model.APIBaseModel):
    """Ordinary least squares regression."""

    formula: str
    coefficients: Dict[str, Coefficient]
    r_squared: Optional[float] = None
    n_observations: int

    @staticmethod
    def from_result(result: statistical_tests.RegressionResult) -> "Regression":
        return Regression(
            formula=result.formula,
            coefficients={
                term: Coefficient(
                    estimate=estimate.estimate,
                    std_error=estimate.std_error,
                    p_value=estimate.p_value,
                )
                for term, estimate in result.coefficients.items()
            },
            r_squared=result.r_squared,
            n_observations=result.n_observations,
        )


class CategorySummary(base_model.APIBaseModel):
    category: Category
    state_count: int
    total_cases: int


class JoinExclusions(base_model.APIBaseModel):
    """Keys of rows dropped by a join because the other side had no row with the same key."""

    name: str
    left_only: List[str]
    right_only: List[str]


class AnalysisReport(base_model.APIBaseModel):
    """Results of comparing COVID-19 cases in states by their 2016 presidential vote."""

    snapshot_date: datetime.date = pydantic.Field(
        ..., description="Most recent date in the COVID-19 data, used for the snapshot"
    )
    election_year: int
    categories: List[CategorySummary]
    cases_t_test: TTest
    cases_by_vote_share: Regression
    cases_by_vote_share_and_population: Regression
    join_exclusions: List[JoinExclusions]

    @staticmethod
    def category_summaries(summary) -> List[CategorySummary]:
        return [
            CategorySummary(
                category=row[CommonFields.CATEGORY],
                state_count=int(row[CommonFields.STATE_COUNT]),
                total_cases=int(row[CommonFields.TOTAL_CASES]),
            )
            for _, row in summary.iterrows()
        ]
