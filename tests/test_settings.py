from __future__ import annotations

import pytest

from midisostenuto.core.normalize import clamp_int, in_range, is_channel, is_note, is_velocity
from midisostenuto.core.settings import PedalSettings, settings_from_mapping


def test_defaults():
    settings = PedalSettings()
    assert settings.restrike == "retrigger"
    assert settings.sostenuto_cc == 66
    assert settings.pedal_threshold == 64
    assert settings.echo_pedal_events is True


def test_settings_from_mapping_normalizes_loose_values():
    settings = settings_from_mapping(
        {
            "restrike": " Layer ",
            "sostenuto_cc": "67",
            "pedal_threshold": 0,
            "echo_pedal_events": "off",
        }
    )
    assert settings == PedalSettings(
        restrike="layer",
        sostenuto_cc=67,
        pedal_threshold=1,
        echo_pedal_events=False,
    )


def test_settings_from_mapping_falls_back_to_defaults():
    settings = settings_from_mapping(
        {
            "restrike": "explode",
            "sostenuto_cc": "sixty-six",
            "pedal_threshold": 500,
            "echo_pedal_events": "maybe",
        }
    )
    assert settings.restrike == "retrigger"
    assert settings.sostenuto_cc == 66
    assert settings.pedal_threshold == 127
    assert settings.echo_pedal_events is True
    assert settings_from_mapping(None) == PedalSettings()


def test_clamp_int():
    assert clamp_int("12", 0, 10, default=5) == 10
    assert clamp_int(None, 0, 10, default=5) == 5
    assert clamp_int(-3, 0, 10, default=5) == 0


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0, True), (15, True), (16, False), (-1, False), (3.0, False), (True, False), ("1", False)],
)
def test_is_channel(value, expected):
    assert is_channel(value) is expected


def test_note_and_velocity_ranges():
    assert is_note(0) and is_note(127)
    assert not is_note(128)
    assert is_velocity(0) and is_velocity(127)
    assert not is_velocity(-1)
    assert in_range(5, 5, 5)
