import pytest

from data.additives import AdditiveSafetyTable
from data.brands import BrandRegistry
from data.regions import RegionCatalog
from scoring.engine import TruScoreEngine
from scoring.rubric import load_rubric


@pytest.fixture(scope="session")
def rubric():
    return load_rubric()


@pytest.fixture(scope="session")
def additives():
    return AdditiveSafetyTable.load()


@pytest.fixture(scope="session")
def brands():
    return BrandRegistry.load()


@pytest.fixture(scope="session")
def regions():
    return RegionCatalog.load()


@pytest.fixture(scope="session")
def engine(rubric, additives, brands, regions):
    return TruScoreEngine(additives=additives, brands=brands, regions=regions, rubric=rubric)
