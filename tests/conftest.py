from datetime import date

import pytest

from api.app import create_app
from common.clock import fixed_clock
from common.services import ExpenseStore
from common.storage import SQLiteStorage

# A Wednesday; the surrounding week starts on Sunday 2024-05-12.
TODAY = date(2024, 5, 15)


@pytest.fixture
def storage(tmp_path):
    backend = SQLiteStorage(tmp_path / "data")
    yield backend
    backend.close()


@pytest.fixture
def store(storage):
    expense_store = ExpenseStore(storage, clock=fixed_clock(TODAY))
    expense_store.initialize()
    return expense_store


@pytest.fixture
def client(tmp_path):
    app = create_app(tmp_path / "api-data", clock=fixed_clock(TODAY))
    app.config.update(TESTING=True)
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def today():
    return TODAY
