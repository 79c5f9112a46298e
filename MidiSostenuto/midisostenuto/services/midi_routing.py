from __future__ import annotations

import logging
from typing import Any, Callable

import mido

from midisostenuto.core.config import (
    CONTROL_VALUE_MAX,
    CONTROL_VALUE_MIN,
    PEDAL_OFF_VALUE,
    PEDAL_ON_VALUE,
)
from midisostenuto.core.normalize import in_range, is_channel
from midisostenuto.core.pedal_engine import PedalEngine
from midisostenuto.core.settings import PedalSettings

logger = logging.getLogger(__name__)

MessageCallback = Callable[[Any], None]


class MidiMessageRouter:
    """Decodes mido messages into pedal engine operations."""

    def __init__(
        self,
        engine: PedalEngine,
        *,
        settings: PedalSettings | None = None,
        passthrough: MessageCallback | None = None,
    ) -> None:
        self._engine = engine
        self._settings = settings or engine.settings
        self._passthrough = passthrough

    def handle_message(self, message: Any) -> bool:
        msg_type = str(getattr(message, "type", "")).lower()
        channel = getattr(message, "channel", None)
        if msg_type == "note_on":
            note = getattr(message, "note", None)
            velocity = getattr(message, "velocity", None)
            if velocity == 0:
                return self._log_result(self._engine.note_off(channel, note), message)
            return self._log_result(self._engine.note_on(channel, note, velocity), message)
        if msg_type == "note_off":
            return self._log_result(self._engine.note_off(channel, getattr(message, "note", None)), message)
        if msg_type == "control_change" and getattr(message, "control", None) == self._settings.sostenuto_cc:
            return self._handle_pedal(channel, getattr(message, "value", 0))
        if self._passthrough is not None:
            self._passthrough(message)
            return True
        logger.debug("Ignoring MIDI message %s", message)
        return False

    def handle_messages(self, messages) -> int:
        return sum(1 for message in messages if self.handle_message(message))

    def _handle_pedal(self, channel: Any, value: Any) -> bool:
        if not (is_channel(channel) and in_range(value, CONTROL_VALUE_MIN, CONTROL_VALUE_MAX)):
            logger.debug("Rejected pedal value %r on channel %r", value, channel)
            return False
        down = value >= self._settings.pedal_threshold
        if down == self._engine.is_pressed(channel):
            # same side of the threshold, nothing changes
            return True
        if down:
            return self._engine.press(channel)
        return self._engine.release(channel)

    @staticmethod
    def _log_result(ok: bool, message: Any) -> bool:
        if not ok:
            logger.debug("Rejected MIDI message %s", message)
        return ok


class MidiOutputSink:
    """Encodes engine events into mido messages handed to ``send``."""

    def __init__(self, send: MessageCallback, *, settings: PedalSettings | None = None) -> None:
        self._send = send
        self._settings = settings or PedalSettings()

    def attach(self, engine: PedalEngine) -> bool:
        results = [
            engine.register_sink("note-on", self.note_on),
            engine.register_sink("note-off", self.note_off),
            engine.register_sink("sostenuto-on", self.sostenuto_on),
            engine.register_sink("sostenuto-off", self.sostenuto_off),
        ]
        return all(results)

    def note_on(self, channel: int, note: int, velocity: int) -> None:
        self._send(mido.Message("note_on", channel=channel, note=note, velocity=velocity))

    def note_off(self, channel: int, note: int) -> None:
        self._send(mido.Message("note_off", channel=channel, note=note, velocity=0))

    def sostenuto_on(self, channel: int) -> None:
        self._send_pedal(channel, PEDAL_ON_VALUE)

    def sostenuto_off(self, channel: int) -> None:
        self._send_pedal(channel, PEDAL_OFF_VALUE)

    def _send_pedal(self, channel: int, value: int) -> None:
        if not self._settings.echo_pedal_events:
            return
        self._send(
            mido.Message(
                "control_change",
                channel=channel,
                control=self._settings.sostenuto_cc,
                value=value,
            )
        )
