import json

import pytest

from planning.config import EXAMPLE_SNAPSHOT
from planning.data import ReferenceDataLoader
from planning.models import DEFAULT_GRADE_SCALE, SubjectRecord
from planning.planner import StudentPlanner


# Common test fixtures
@pytest.fixture
def scale():
    """The O-Level grade scale."""
    return DEFAULT_GRADE_SCALE


@pytest.fixture
def make_subjects():
    """Build SubjectRecords from grades, named Subject 1..n."""
    def _make(grades, hours=0):
        return [
            SubjectRecord(subject_name=f"Subject {i}", grade_estimate=grade, study_hours_per_week=hours)
            for i, grade in enumerate(grades, 1)
        ]
    return _make


@pytest.fixture(scope="session")
def loader():
    """Reference loader over the packaged tables."""
    return ReferenceDataLoader()


@pytest.fixture
def snapshot_data():
    """Raw example snapshot as read from disk."""
    with open(EXAMPLE_SNAPSHOT, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def planner(loader):
    return StudentPlanner(loader=loader)


@pytest.fixture
def snapshot(planner):
    """Parsed example snapshot."""
    return planner.load_snapshot(EXAMPLE_SNAPSHOT)
