"""
Data schema shared by the loaders, the analysis pipeline and the report.
"""
import enum


class GetByValueMixin:
    """Mixin making it easy to get an Enum object or None if not found.

    Unlike `YourEnumClass(value)`, the `get` method does not raise `ValueError` when `value`
    is not in the enum.
    """

    @classmethod
    def get(cls, value):
        return cls._value2member_map_.get(value, None)


class ValueAsStrMixin:
    def __str__(self):
        # Make sure str(CommonFields.CASES) returns a str, not a FieldName. DataFrame.itertuples
        # passes a list of fields to collections.namedtuple which calls map(str, fields) and then
        # checks that the result types are str.
        return str(self.value)


class FieldName(str):
    """Common base-class for enums of fields, CSV column names etc"""

    __reduce_ex__ = str.__reduce_ex__  # Work-around for https://bugs.python.org/issue44342


@enum.unique
class CommonFields(GetByValueMixin, ValueAsStrMixin, FieldName, enum.Enum):
    """Common field names shared across different sources of data"""

    @classmethod
    def list(cls):
        return list(map(lambda c: c.value, cls))

    DATE = "date"

    # Full state name, i.e. Massachusetts. Every join in the analysis uses this as the key.
    STATE = "state"

    # 2 digit state FIPS code
    FIPS = "fips"
    STATE_FIPS = "state_fips"

    # Election results
    YEAR = "year"
    CANDIDATE = "candidate"
    CANDIDATE_VOTES = "candidate_votes"
    CLINTON_VOTES = "clinton_votes"
    TRUMP_VOTES = "trump_votes"
    TRUMP_VOTE_SHARE = "trump_vote_share"
    CATEGORY = "category"

    # Cumulative values
    CASES = "cases"
    DEATHS = "deaths"

    # Incidence values
    PREVIOUS_DAY_CASES = "previous_day_cases"
    NEW_CASES = "new_cases"
    PERCENT_INFECTED = "percent_infected"

    POPULATION = "population"

    # Daily summary of percent_infected
    MEAN_PERCENT_INFECTED = "mean_percent_infected"
    STANDARD_ERROR = "standard_error"
    OBSERVATION_COUNT = "observation_count"

    # Category summary
    STATE_COUNT = "state_count"
    TOTAL_CASES = "total_cases"


@enum.unique
class Category(GetByValueMixin, ValueAsStrMixin, FieldName, enum.Enum):
    """Classification of a state by the majority of its 2016 two-party presidential vote."""

    TRUMP = "Trump"
    CLINTON = "Clinton"
    # Exactly half of the two-party vote. There is no tie-break; these states are reported
    # separately instead of being assigned to either side.
    TIE = "Tie"


COMMON_FIELDS_ORDER_MAP = {common: i for i, common in enumerate(CommonFields)}
