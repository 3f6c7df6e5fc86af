import os
import sys
from datetime import datetime, timezone

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config import settings
from engine.series import DataPoint


def ms(*args) -> int:
    """Epoch milliseconds for a UTC wall-clock time."""
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.fixture(autouse=True)
def utc_calendar(monkeypatch):
    """Pin bucketing to UTC so results do not depend on the environment."""
    monkeypatch.setattr(settings, "calendar_timezone", "UTC")
    yield


@pytest.fixture(autouse=True)
def clear_pipelines():
    from api.routes import common

    common.close_pipelines()
    yield
    common.close_pipelines()


@pytest.fixture
def hourly_series():
    start = ms(2024, 3, 4, 0, 0)
    return tuple(
        DataPoint(timestamp=start + i * 3_600_000, value=float(i % 24))
        for i in range(72)
    )
