from libs.datasets.sources.election_results import ElectionResultsDataset
from libs.datasets.sources.nytimes_dataset import NYTimesDataset
from libs.datasets.sources.census_population import CensusPopulationDataset

from commondata.common_fields import Category
from commondata.common_fields import CommonFields
