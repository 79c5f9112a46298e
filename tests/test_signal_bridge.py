from __future__ import annotations

import threading

import pytest

QtCore = pytest.importorskip("PySide6.QtCore")

from midisostenuto.core.pedal_engine import PedalEngine  # noqa: E402
from midisostenuto.qt.signal_bridge import SostenutoSignalBridge  # noqa: E402


@pytest.fixture(scope="module")
def qt_app():
    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])


def _collect(bridge: SostenutoSignalBridge) -> list[tuple]:
    events: list[tuple] = []
    bridge.noteOn.connect(lambda c, n, v: events.append(("note-on", c, n, v)))
    bridge.noteOff.connect(lambda c, n: events.append(("note-off", c, n)))
    bridge.sostenutoOn.connect(lambda c: events.append(("sostenuto-on", c)))
    bridge.sostenutoOff.connect(lambda c: events.append(("sostenuto-off", c)))
    return events


def test_engine_events_become_signals(qt_app):
    bridge = SostenutoSignalBridge()
    events = _collect(bridge)
    engine = bridge.engine
    engine.note_on(0, 60, 100)
    engine.press(0)
    engine.note_off(0, 60)
    engine.release(0)
    assert events == [
        ("note-on", 0, 60, 100),
        ("sostenuto-on", 0),
        ("note-off", 0, 60),
        ("sostenuto-off", 0),
    ]


def _from_worker_thread(action) -> None:
    worker = threading.Thread(target=action)
    worker.start()
    worker.join(timeout=5)
    assert not worker.is_alive()


def test_input_from_another_thread_runs_on_the_bridge_thread(qt_app):
    engine = PedalEngine()
    bridge = SostenutoSignalBridge(engine)
    events = _collect(bridge)

    def play() -> None:
        bridge.queue_note_on(3, 50, 90)
        bridge.queue_press(3)
        bridge.queue_note_off(3, 50)

    _from_worker_thread(play)
    assert engine.held_notes(3) == ()
    assert not engine.is_pressed(3)
    assert events == []

    qt_app.processEvents()
    assert engine.sustaining_notes(3) == (50,)
    assert events == [("note-on", 3, 50, 90), ("sostenuto-on", 3)]

    _from_worker_thread(lambda: bridge.queue_release(3))
    assert engine.is_pressed(3)
    qt_app.processEvents()
    assert events[-2:] == [("note-off", 3, 50), ("sostenuto-off", 3)]


@pytest.mark.parametrize(
    "call",
    [
        lambda bridge: bridge.queue_note_on(0, 60.7, 100),
        lambda bridge: bridge.queue_note_on(True, 60, 100),
        lambda bridge: bridge.queue_note_on(0, 60, "loud"),
        lambda bridge: bridge.queue_note_off(0, "60"),
        lambda bridge: bridge.queue_press(16),
        lambda bridge: bridge.queue_release(-1),
    ],
)
def test_queued_input_rejects_values_the_engine_would_reject(qt_app, call):
    bridge = SostenutoSignalBridge()
    events = _collect(bridge)
    assert call(bridge) is False
    qt_app.processEvents()
    assert events == []
    assert bridge.engine.held_notes(0) == ()
