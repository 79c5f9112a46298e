from __future__ import annotations

from typing import Any, Callable

from midisostenuto.core.channel_state import ChannelState
from midisostenuto.core.config import CHANNEL_COUNT, EVENT_ARITY, EVENT_NAMES
from midisostenuto.core.normalize import is_channel, is_note, is_velocity
from midisostenuto.core.settings import PedalSettings


EventSink = Callable[..., Any]


class PedalEngine:
    """Sostenuto pedal state machine for 16 MIDI channels.

    Notes whose keys are down when the pedal is pressed are captured. Releasing
    a captured key while the pedal is still down defers its note-off until the
    pedal comes up. Notes struck after the press pass through untouched.

    Every operation validates its arguments before touching any state and
    reports the outcome as a bool. Events are delivered synchronously to the
    sink registered for their name, on the caller's stack.
    """

    channel_count = CHANNEL_COUNT

    def __init__(self, settings: PedalSettings | None = None) -> None:
        self._settings = settings or PedalSettings()
        self._channels = [ChannelState() for _ in range(CHANNEL_COUNT)]
        self._sinks: dict[str, EventSink | None] = {name: None for name in EVENT_NAMES}

    @property
    def settings(self) -> PedalSettings:
        return self._settings

    def register_sink(self, event_name: str, sink: EventSink) -> bool:
        if event_name not in EVENT_NAMES or not callable(sink):
            return False
        self._sinks[event_name] = sink
        return True

    on = register_sink

    def emit(self, event_name: str, *payload: int) -> bool:
        if event_name not in EVENT_NAMES:
            return False
        sink = self._sinks[event_name]
        if sink is None:
            return False
        if len(payload) != EVENT_ARITY[event_name]:
            return False
        sink(*payload)
        return True

    def press(self, channel: int) -> bool:
        if not is_channel(channel):
            return False
        state = self._channels[channel]
        state.pedal_pressed = True
        state.capture_held_keys()
        self.emit("sostenuto-on", channel)
        return True

    def release(self, channel: int) -> bool:
        if not is_channel(channel):
            return False
        state = self._channels[channel]
        state.pedal_pressed = False
        for note, captured in enumerate(state.captured):
            if not captured:
                continue
            state.captured[note] = False
            if state.sustaining[note]:
                state.sustaining[note] = False
                self.emit("note-off", channel, note)
        self.emit("sostenuto-off", channel)
        return True

    def note_on(self, channel: int, note: int, velocity: int) -> bool:
        if not (is_channel(channel) and is_note(note) and is_velocity(velocity)):
            return False
        state = self._channels[channel]
        state.key_down[note] = True
        if state.sustaining[note]:
            self._restrike(channel, note, state)
        self.emit("note-on", channel, note, velocity)
        return True

    def note_off(self, channel: int, note: int) -> bool:
        if not (is_channel(channel) and is_note(note)):
            return False
        state = self._channels[channel]
        state.key_down[note] = False
        if state.pedal_pressed and state.captured[note]:
            state.sustaining[note] = True
        else:
            self.emit("note-off", channel, note)
        return True

    def _restrike(self, channel: int, note: int, state: ChannelState) -> None:
        policy = self._settings.restrike
        if policy == "layer":
            return
        state.sustaining[note] = False
        if policy == "retrigger":
            self.emit("note-off", channel, note)

    def is_pressed(self, channel: int) -> bool:
        if not is_channel(channel):
            return False
        return self._channels[channel].pedal_pressed

    def held_notes(self, channel: int) -> tuple[int, ...]:
        if not is_channel(channel):
            return ()
        return self._channels[channel].held_notes()

    def captured_notes(self, channel: int) -> tuple[int, ...]:
        if not is_channel(channel):
            return ()
        return self._channels[channel].captured_notes()

    def sustaining_notes(self, channel: int) -> tuple[int, ...]:
        if not is_channel(channel):
            return ()
        return self._channels[channel].sustaining_notes()
