from __future__ import annotations

import pytest

from core.settings import Settings
from tests.support import FakeGateway, make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()
