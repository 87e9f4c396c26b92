from datetime import datetime, timezone

import pytest

from cartrace.generator import SnapshotGenerator

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def generator():
    return SnapshotGenerator(clock=lambda: FIXED_NOW)
