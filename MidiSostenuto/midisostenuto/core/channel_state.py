from __future__ import annotations

from dataclasses import dataclass, field

from midisostenuto.core.config import NOTE_COUNT


def _note_slots() -> list[bool]:
    return [False] * NOTE_COUNT


@dataclass(slots=True)
class ChannelState:
    pedal_pressed: bool = False
    key_down: list[bool] = field(default_factory=_note_slots)
    captured: list[bool] = field(default_factory=_note_slots)
    sustaining: list[bool] = field(default_factory=_note_slots)

    def capture_held_keys(self) -> None:
        # notes already sustaining from an earlier press stay captured
        self.captured[:] = [held or pending for held, pending in zip(self.key_down, self.sustaining)]

    def held_notes(self) -> tuple[int, ...]:
        return _set_slots(self.key_down)

    def captured_notes(self) -> tuple[int, ...]:
        return _set_slots(self.captured)

    def sustaining_notes(self) -> tuple[int, ...]:
        return _set_slots(self.sustaining)


def _set_slots(slots: list[bool]) -> tuple[int, ...]:
    return tuple(note for note, flag in enumerate(slots) if flag)
