import pytest
from datetime import datetime, timedelta, timezone

from bmilog.history import HistoryStore
from bmilog.measurement import Gender, MeasurementInput
from bmilog.session import SessionController
from bmilog.storage import InMemoryBackend


class FixedClock:
    """
    Deterministic clock: returns `start`, then advances by `step` on each call.
    """

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def store(backend) -> HistoryStore:
    return HistoryStore(backend)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 10, 19, 8, 15, 30, tzinfo=timezone.utc))


@pytest.fixture
def session(store, clock) -> SessionController:
    return SessionController(store, clock=clock)


@pytest.fixture
def female_measurement() -> MeasurementInput:
    """The default input of the calculator screen."""
    return MeasurementInput(age=25, gender=Gender.FEMALE, weight_kg=60, height_cm=170)


@pytest.fixture
def make_clock():
    return FixedClock
