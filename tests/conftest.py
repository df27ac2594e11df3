"""Pytest fixtures for tabscope tests."""

import pytest

from tabscope.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def classification_csv() -> str:
    """Two well separated classes, two informative numeric features."""
    lines = ["a,b,target"]
    for i in range(1, 21):
        label = "X" if i <= 10 else "Y"
        lines.append(f"{i},{i + 1},{label}")
    return "\n".join(lines)


@pytest.fixture
def clustered_rows():
    """Two tight clusters; any reasonable split classifies them correctly."""
    rows = []
    for repeat in range(2):
        for v in (1, 2, 3, 4, 5):
            rows.append({"f": float(v), "g": float(v + repeat), "label": "low"})
        for v in (11, 12, 13, 14, 15):
            rows.append({"f": float(v), "g": float(v + repeat), "label": "high"})
    return rows


@pytest.fixture
def regression_rows():
    """20 rows with 20 distinct numeric targets (y = 2x + 1)."""
    return [{"x": float(i), "noise": float(i % 3), "y": float(2 * i + 1)} for i in range(1, 21)]
