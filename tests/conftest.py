from datetime import date

import pytest

from src.infrastructure.mockup.mockup_storage import MockupStorage

TODAY = date(2024, 1, 15)


class FixedClock:
    """Clock returning a settable date."""

    def __init__(self, today: date = TODAY):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def storage(clock) -> MockupStorage:
    return MockupStorage(seed=12345, clock=clock)
