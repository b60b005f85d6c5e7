# tests/conftest.py

import pytest
from PySide6.QtCore import QCoreApplication

from list_store import ListStore
from storage import MemoryStorage


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """One core application for the whole run so Qt signals behave as in the app."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def store(storage: MemoryStorage) -> ListStore:
    """A store loaded from empty storage, i.e. holding just the default list."""
    s = ListStore(storage)
    s.load()
    return s
