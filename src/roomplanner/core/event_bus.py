"""Planner change notifications.

Every mutation the planner performs is recorded as a ``PlannerEvent``. A UI
shell can either subscribe to event names and refresh as they arrive, or
drain the recorded history after a batch of interactions.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

Listener = Callable[["PlannerEvent"], None]

# Subscribing to this name receives every event.
ALL_EVENTS = "*"


@dataclass(frozen=True)
class PlannerEvent:
    name: str
    payload: dict[str, Any]


class EventBus:
    def __init__(self) -> None:
        self._history: list[PlannerEvent] = []
        self._listeners: dict[str, list[Listener]] = {}

    def subscribe(self, name: str, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for ``name`` and return a function that removes it."""
        self._listeners.setdefault(name, []).append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(name, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def emit(self, name: str, **payload: Any) -> PlannerEvent:
        event = PlannerEvent(name=name, payload=payload)
        self._history.append(event)
        for listener in [*self._listeners.get(name, ()), *self._listeners.get(ALL_EVENTS, ())]:
            listener(event)
        return event

    @property
    def events(self) -> list[PlannerEvent]:
        return list(self._history)

    def named(self, name: str) -> list[PlannerEvent]:
        return [event for event in self._history if event.name == name]

    def drain(self) -> list[PlannerEvent]:
        history, self._history = self._history, []
        return history
