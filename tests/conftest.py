import os
import sys
from copy import deepcopy
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("FUNNEL_DEFAULT_CURRENCY", "USD")
os.environ.setdefault("FUNNEL_LINT_ON_MUTATION", "false")

from funnel_builder.services.store import FunnelStore  # noqa: E402
from funnel_builder.services.validation import parse_or_fail  # noqa: E402

VALID_FUNNEL = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "name": "Test Funnel",
    "product": {
        "title": "Test Product",
        "description": "A test product description",
        "price": 29.99,
        "currency": "USD",
    },
    "blocks": [
        {
            "id": "callout-1",
            "tag": "Callout",
            "props": {"title": "Welcome", "subtitle": "This is a test", "align": "center"},
        },
        {
            "id": "text-1",
            "tag": "Text",
            "props": {"content": "Some body text", "align": "left", "size": "base"},
        },
        {
            "id": "cta-1",
            "tag": "AddToCartButton",
            "props": {"text": "Buy Now - $29.99", "link": "#", "variant": "primary", "size": "lg"},
        },
    ],
}


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int = 60) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def valid_payload() -> dict:
    return deepcopy(VALID_FUNNEL)


@pytest.fixture
def valid_funnel(valid_payload):
    return parse_or_fail(valid_payload)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> FunnelStore:
    return FunnelStore(clock=clock, lint_on_mutation=False)
