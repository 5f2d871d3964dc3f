import pytest

from wardrobe_cpw.core.currency import CurrencyFormatter
from wardrobe_cpw.services.analytics import AnalyticsEngine, InMemoryWardrobeStore

from fixtures.wardrobe_fixtures import NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def formatter():
    return CurrencyFormatter("USD")


@pytest.fixture
def store(clock):
    return InMemoryWardrobeStore(clock=clock)


@pytest.fixture
def engine(store, formatter, clock):
    return AnalyticsEngine(store, formatter=formatter, clock=clock)
