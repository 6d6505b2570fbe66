from __future__ import annotations

from enum import Enum


class WidgetPhase(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    ANSWERED = "answered"
    FAILED = "failed"


ALLOWED_TRANSITIONS: dict[WidgetPhase, frozenset[WidgetPhase]] = {
    WidgetPhase.IDLE: frozenset({WidgetPhase.PENDING}),
    WidgetPhase.PENDING: frozenset({WidgetPhase.ANSWERED, WidgetPhase.FAILED}),
    WidgetPhase.ANSWERED: frozenset({WidgetPhase.PENDING}),
    WidgetPhase.FAILED: frozenset({WidgetPhase.PENDING}),
}


def is_valid_transition(current: WidgetPhase, new: WidgetPhase) -> bool:
    # clear() may reset from anywhere
    if new == WidgetPhase.IDLE:
        return True
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())
