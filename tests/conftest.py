"""Shared fixtures for the habit tracker tests"""
import pytest

from models import Habit


@pytest.fixture
def make_habit():
    """Factory for habits with given completed days and notes"""
    counter = {"n": 0}

    def _make(name="Read", logs=(), notes=None, category="learning",
              created_at="2024-01-01T08:00:00.000+00:00", description=None):
        counter["n"] += 1
        return Habit(
            id=f"h{counter['n']}",
            name=name,
            description=description,
            category=category,
            created_at=created_at,
            logs={key: True for key in logs},
            notes=dict(notes or {}),
        )

    return _make


@pytest.fixture
def read_habit(make_habit):
    """The 'Read' habit: created 2024-01-01, done on Jan 1st and 3rd"""
    return make_habit("Read", logs=["2024-01-01", "2024-01-03"])


@pytest.fixture
def repo_path(tmp_path):
    return tmp_path / "data" / "habitai_data_v1.json"
