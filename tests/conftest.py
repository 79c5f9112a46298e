from __future__ import annotations

import pytest

from midisostenuto.core.pedal_engine import PedalEngine


class EventRecorder:
    """Collects engine events in emission order."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def attach(self, engine: PedalEngine) -> None:
        for name in ("note-on", "note-off", "sostenuto-on", "sostenuto-off"):
            engine.register_sink(name, self._sink(name))

    def _sink(self, name: str):
        def record(*payload):
            self.events.append((name, *payload))

        return record

    def of(self, name: str) -> list[tuple]:
        return [event for event in self.events if event[0] == name]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def engine(recorder: EventRecorder) -> PedalEngine:
    pedal = PedalEngine()
    recorder.attach(pedal)
    return pedal
