from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from midisostenuto.core.normalize import is_channel, is_note, is_velocity
from midisostenuto.core.pedal_engine import PedalEngine


class SostenutoSignalBridge(QObject):
    """Exposes a PedalEngine to Qt code.

    Engine events come out as the public signals. The ``queue_*`` methods are
    safe to call from MIDI backend threads: they only emit private signals, and
    the engine transition runs in the thread this bridge lives in.
    """

    noteOn = Signal(int, int, int)
    noteOff = Signal(int, int)
    sostenutoOn = Signal(int)
    sostenutoOff = Signal(int)

    _noteOnQueued = Signal(int, int, int)
    _noteOffQueued = Signal(int, int)
    _pressQueued = Signal(int)
    _releaseQueued = Signal(int)

    def __init__(self, engine: PedalEngine | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._engine = engine or PedalEngine()
        self._engine.register_sink("note-on", self.noteOn.emit)
        self._engine.register_sink("note-off", self.noteOff.emit)
        self._engine.register_sink("sostenuto-on", self.sostenutoOn.emit)
        self._engine.register_sink("sostenuto-off", self.sostenutoOff.emit)

        self._noteOnQueued.connect(self._on_note_on_queued)
        self._noteOffQueued.connect(self._on_note_off_queued)
        self._pressQueued.connect(self._on_press_queued)
        self._releaseQueued.connect(self._on_release_queued)

    @property
    def engine(self) -> PedalEngine:
        return self._engine

    def queue_note_on(self, channel: int, note: int, velocity: int) -> bool:
        if not (is_channel(channel) and is_note(note) and is_velocity(velocity)):
            return False
        self._noteOnQueued.emit(channel, note, velocity)
        return True

    def queue_note_off(self, channel: int, note: int) -> bool:
        if not (is_channel(channel) and is_note(note)):
            return False
        self._noteOffQueued.emit(channel, note)
        return True

    def queue_press(self, channel: int) -> bool:
        if not is_channel(channel):
            return False
        self._pressQueued.emit(channel)
        return True

    def queue_release(self, channel: int) -> bool:
        if not is_channel(channel):
            return False
        self._releaseQueued.emit(channel)
        return True

    def _on_note_on_queued(self, channel: int, note: int, velocity: int) -> None:
        self._engine.note_on(channel, note, velocity)

    def _on_note_off_queued(self, channel: int, note: int) -> None:
        self._engine.note_off(channel, note)

    def _on_press_queued(self, channel: int) -> None:
        self._engine.press(channel)

    def _on_release_queued(self, channel: int) -> None:
        self._engine.release(channel)
