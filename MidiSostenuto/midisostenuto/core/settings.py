from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from midisostenuto.core.config import (
    CONTROL_VALUE_MAX,
    CONTROL_VALUE_MIN,
    DEFAULT_PEDAL_THRESHOLD,
    DEFAULT_RESTRIKE_POLICY,
    RESTRIKE_POLICIES,
    SOSTENUTO_CC,
    RestrikePolicy,
)
from midisostenuto.core.normalize import clamp_int

# pedal "down" needs a non-zero value, otherwise the pedal could never be released
PEDAL_THRESHOLD_MIN = 1


@dataclass(frozen=True, slots=True)
class PedalSettings:
    restrike: RestrikePolicy = DEFAULT_RESTRIKE_POLICY
    sostenuto_cc: int = SOSTENUTO_CC
    pedal_threshold: int = DEFAULT_PEDAL_THRESHOLD
    echo_pedal_events: bool = True


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in {"1", "true", "yes", "on"}:
            return True
        if text in {"0", "false", "no", "off"}:
            return False
    return default


def _coerce_restrike(value: Any) -> RestrikePolicy:
    text = str(value or "").strip().lower()
    if text in RESTRIKE_POLICIES:
        return text  # type: ignore[return-value]
    return DEFAULT_RESTRIKE_POLICY


def settings_from_mapping(payload: Mapping[str, Any] | None) -> PedalSettings:
    defaults = PedalSettings()
    if not isinstance(payload, Mapping):
        return defaults
    return PedalSettings(
        restrike=_coerce_restrike(payload.get("restrike", defaults.restrike)),
        sostenuto_cc=clamp_int(
            payload.get("sostenuto_cc", defaults.sostenuto_cc),
            CONTROL_VALUE_MIN,
            CONTROL_VALUE_MAX,
            default=defaults.sostenuto_cc,
        ),
        pedal_threshold=clamp_int(
            payload.get("pedal_threshold", defaults.pedal_threshold),
            PEDAL_THRESHOLD_MIN,
            CONTROL_VALUE_MAX,
            default=defaults.pedal_threshold,
        ),
        echo_pedal_events=_coerce_bool(
            payload.get("echo_pedal_events", defaults.echo_pedal_events),
            defaults.echo_pedal_events,
        ),
    )
