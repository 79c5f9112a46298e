from __future__ import annotations

from typing import Any

from midisostenuto.core.config import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    NOTE_MAX,
    NOTE_MIN,
    VELOCITY_MAX,
    VELOCITY_MIN,
)


def clamp_int(value: Any, minimum: int, maximum: int, *, default: int) -> int:
    try:
        parsed = int(value)
    except Exception:
        parsed = int(default)
    return max(int(minimum), min(int(maximum), parsed))


def in_range(value: Any, minimum: int, maximum: int) -> bool:
    # bool is an int subclass but never a valid MIDI number
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return minimum <= value <= maximum


def is_channel(value: Any) -> bool:
    return in_range(value, CHANNEL_MIN, CHANNEL_MAX)


def is_note(value: Any) -> bool:
    return in_range(value, NOTE_MIN, NOTE_MAX)


def is_velocity(value: Any) -> bool:
    return in_range(value, VELOCITY_MIN, VELOCITY_MAX)
