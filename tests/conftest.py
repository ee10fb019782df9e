from datetime import date, timedelta

import pytest

from callcenter_wfm import HistoryStore


@pytest.fixture
def four_mondays():
    """Four consecutive Mondays of 2000 calls at 300s AHT."""
    store = HistoryStore()
    first = date(2024, 1, 1)  # a Monday
    for week in range(4):
        store.put(first + timedelta(weeks=week), calls=2000, aht=300, agents=40, sl=85)
    return store
