from __future__ import annotations

import logging
import time
from typing import Callable

from midisostenuto.core.midi_ports import MidiPortManager
from midisostenuto.core.pedal_engine import PedalEngine
from midisostenuto.core.settings import PedalSettings
from midisostenuto.services.midi_routing import MidiMessageRouter, MidiOutputSink

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.01


class SostenutoRelay:
    """Feeds a MIDI input through a PedalEngine into a MIDI output.

    Messages the engine does not handle are forwarded to the output unchanged.
    """

    def __init__(
        self,
        ports: MidiPortManager,
        *,
        settings: PedalSettings | None = None,
        engine: PedalEngine | None = None,
    ) -> None:
        self._settings = settings or PedalSettings()
        self._ports = ports
        self._engine = engine or PedalEngine(self._settings)
        self._output = MidiOutputSink(self._forward, settings=self._settings)
        self._output.attach(self._engine)
        self._router = MidiMessageRouter(self._engine, settings=self._settings, passthrough=self._forward)

    @property
    def engine(self) -> PedalEngine:
        return self._engine

    def open(self, input_name: str, output_name: str) -> None:
        self._ports.open_output(output_name)
        self._ports.open_input(input_name)

    def pump(self) -> int:
        return self._router.handle_messages(self._ports.poll())

    def run(
        self,
        should_stop: Callable[[], bool],
        *,
        interval: float = POLL_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        logger.info(
            "Relaying %r -> %r",
            self._ports.current_input(),
            self._ports.current_output(),
        )
        while not should_stop():
            self.pump()
            sleep(interval)

    def close(self) -> None:
        self._ports.close()

    def _forward(self, message) -> None:
        if not self._ports.send(message):
            logger.debug("No MIDI output open, dropped %s", message)
