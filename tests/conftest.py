from datetime import datetime, timezone

import pytest


@pytest.fixture
def day_one():
    return datetime(2026, 1, 29, tzinfo=timezone.utc)
