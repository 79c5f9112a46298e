from __future__ import annotations

from typing import Literal

APP_NAME = "MidiSostenuto"
APP_VERSION = "1.0.0"

CHANNEL_COUNT = 16
CHANNEL_MIN = 0x0
CHANNEL_MAX = 0xF
NOTE_COUNT = 128
NOTE_MIN = 0x00
NOTE_MAX = 0x7F
VELOCITY_MIN = 0x00
VELOCITY_MAX = 0x7F
CONTROL_VALUE_MIN = 0x00
CONTROL_VALUE_MAX = 0x7F

EventName = Literal["note-off", "note-on", "sostenuto-on", "sostenuto-off"]
EVENT_NAMES: tuple[EventName, ...] = ("note-off", "note-on", "sostenuto-on", "sostenuto-off")
EVENT_ARITY: dict[EventName, int] = {
    "note-off": 2,
    "note-on": 3,
    "sostenuto-on": 1,
    "sostenuto-off": 1,
}

SOSTENUTO_CC = 66
DEFAULT_PEDAL_THRESHOLD = 64
PEDAL_ON_VALUE = 127
PEDAL_OFF_VALUE = 0

RestrikePolicy = Literal["retrigger", "cancel", "layer"]
RESTRIKE_POLICIES: tuple[RestrikePolicy, ...] = ("retrigger", "cancel", "layer")
DEFAULT_RESTRIKE_POLICY: RestrikePolicy = "retrigger"
