from __future__ import annotations

import pytest

from tests.fake_broker import FakeBroker


@pytest.fixture
def fake_broker() -> FakeBroker:
    return FakeBroker()
