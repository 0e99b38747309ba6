import matplotlib

matplotlib.use("Agg")

import pytest

from core.process import ProcessTable

SAMPLE_PAIRS = [(1, 5), (2, 3), (3, 8)]


@pytest.fixture
def sample_table():
    """P1=5, P2=3, P3=8 in arrival order."""
    return ProcessTable.from_pairs(SAMPLE_PAIRS)


@pytest.fixture
def schedule_file(tmp_path):
    path = tmp_path / "schedule.csv"
    path.write_text("P1,5\nP2,3\nP3,8\n", encoding="utf-8")
    return path
