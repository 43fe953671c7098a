"""
Interactive session controller.

SessionController is the write-side API for the rendering layer: it turns a
MeasurementInput into a stored ResultRecord, forwards deletions to the
history, and moves between views along an explicit transition table.
Observers subscribe to read-only SessionSnapshot updates; a failing observer
is logged and never undoes a committed change.

submit_measurement is accepted from every view (the calculator form can be
submitted while any screen is showing) and always lands on RESULT. Only
navigate() is bound by the transition table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

from . import config
from .engine import evaluate
from .history import HistoryStore
from .measurement import MeasurementInput
from .record import ResultRecord

LOGGER = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Listener = Callable[["SessionSnapshot"], None]


class View(Enum):
    INPUT = auto()
    RESULT = auto()
    HISTORY = auto()
    PROFILE = auto()


# Views reachable through navigate(); RESULT is entered only by submitting a measurement
TRANSITIONS: dict[View, frozenset[View]] = {
    View.INPUT: frozenset({View.INPUT, View.HISTORY, View.PROFILE}),
    View.HISTORY: frozenset({View.INPUT, View.HISTORY, View.PROFILE}),
    View.PROFILE: frozenset({View.INPUT, View.HISTORY, View.PROFILE}),
    View.RESULT: frozenset({View.INPUT, View.RESULT}),
}


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Read-only view of the session state.

    Attributes:
        view: Current view.
        current_result: Most recently computed record, if any.
        history: Stored records, newest first.
    """

    view: View
    current_result: Optional[ResultRecord]
    history: Tuple[ResultRecord, ...]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_record_id(instant: datetime) -> str:
    # fixed-width UTC ISO-8601, so ids sort lexicographically in creation order
    return instant.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class SessionController:
    def __init__(
        self,
        history: HistoryStore,
        clock: Clock = _utc_now,
        display_date_format: str = config.DISPLAY_DATE_FORMAT,
    ):
        self.history = history
        self._clock = clock
        self._display_date_format = display_date_format
        self._view = View.INPUT
        self._current_result: Optional[ResultRecord] = None
        self._listeners: List[Listener] = []

    @property
    def current_view(self) -> View:
        return self._view

    @property
    def current_result(self) -> Optional[ResultRecord]:
        return self._current_result

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            view=self._view,
            current_result=self._current_result,
            history=self.history.records,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener` for snapshots after each state change; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                LOGGER.error(f"Session listener failed: {e}")

    def _next_instant(self) -> datetime:
        """
        Creation instant for a new record, kept strictly after the newest
        stored record so ids never collide or go backwards.
        """
        instant = self._clock()
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        if self.history.records:
            newest = self.history.records[0].created_at
            if newest.tzinfo is None:
                newest = newest.replace(tzinfo=timezone.utc)
            if instant <= newest:
                instant = newest + timedelta(microseconds=1)
        return instant

    def submit_measurement(self, measurement: MeasurementInput) -> ResultRecord:
        """
        Evaluate `measurement`, store the result as the newest history entry
        and switch to the result view.
        """
        evaluation = evaluate(measurement)
        instant = self._next_instant()
        record = ResultRecord(
            id=format_record_id(instant),
            name=measurement.name,
            age=measurement.age,
            gender=measurement.gender,
            weight_kg=measurement.weight_kg,
            height_cm=measurement.height_cm,
            bmi=evaluation.bmi,
            category=evaluation.category,
            ideal_weight_label=evaluation.ideal_weight_label,
            created_at=instant,
            display_date=instant.astimezone().strftime(self._display_date_format),
        )
        LOGGER.info(f"Computed BMI {record.bmi} ({record.category.value}) as record {record.id}")
        self._current_result = record
        self.history.append(record)
        self._view = View.RESULT
        self._notify()
        return record

    def delete_history_entry(self, record_id: str) -> None:
        # current view and current result are left as they are
        self.history.remove(record_id)
        self._notify()

    def navigate(self, view: View) -> bool:
        """
        Move to `view` if the transition table allows it.
        Disallowed moves are logged and leave the state untouched.
        """
        if view not in TRANSITIONS[self._view]:
            LOGGER.warning(f"Ignoring navigation from {self._view.name} to {view.name}")
            return False
        self._view = view
        self._notify()
        return True

    def back(self) -> bool:
        return self.navigate(View.INPUT)
