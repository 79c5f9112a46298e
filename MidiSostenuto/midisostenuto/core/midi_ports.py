from __future__ import annotations

import importlib
import logging
from typing import Any

logger = logging.getLogger(__name__)


class MidiPortManager:
    """Opens one MIDI input and one MIDI output through mido.

    Input is read with ``poll()``, which never blocks; the host decides when to
    drain it. No background threads or port callbacks are used.
    """

    def __init__(self, mido_module: Any | None = None) -> None:
        self._input_port = None
        self._output_port = None
        self._input_name = ""
        self._output_name = ""
        self._mido_module = None
        self._backend_error = ""
        if mido_module is not None:
            self._mido_module = mido_module
        else:
            self._load_mido_module()

    def _load_mido_module(self) -> None:
        try:
            module = importlib.import_module("mido")
        except Exception as exc:
            self._backend_error = f"Could not import mido: {type(exc).__name__}: {exc}"
            logger.warning(self._backend_error)
            self._mido_module = None
            return

        try:
            list(module.get_input_names())
        except Exception as exc:
            self._backend_error = self._format_backend_error(exc)
            logger.warning("MIDI backend unavailable: %s", self._backend_error)
            self._mido_module = None
            return

        self._mido_module = module
        self._backend_error = ""

    @staticmethod
    def _format_backend_error(exc: Exception) -> str:
        missing_module = str(getattr(exc, "name", "")).strip().lower()
        if isinstance(exc, ModuleNotFoundError) and missing_module == "rtmidi":
            return "Could not load module 'rtmidi'. Install 'python-rtmidi' for this Python environment."
        return f"{type(exc).__name__}: {exc}"

    def backend_error(self) -> str:
        return self._backend_error

    def list_input_devices(self) -> list[str]:
        return self._list_names("get_input_names")

    def list_output_devices(self) -> list[str]:
        return self._list_names("get_output_names")

    def _list_names(self, getter_name: str) -> list[str]:
        if self._mido_module is None:
            return []
        try:
            names = list(getattr(self._mido_module, getter_name)())
        except Exception as exc:
            self._backend_error = self._format_backend_error(exc)
            logger.warning("Could not list MIDI ports: %s", self._backend_error)
            return []
        self._backend_error = ""
        return [str(name) for name in names if str(name).strip()]

    def current_input(self) -> str:
        return self._input_name

    def current_output(self) -> str:
        return self._output_name

    def open_input(self, name: str) -> None:
        target = str(name).strip()
        self._close_input()
        if not target:
            return
        self._input_port = self._open_port("open_input", target, "input")
        self._input_name = target

    def open_output(self, name: str) -> None:
        target = str(name).strip()
        self._close_output()
        if not target:
            return
        self._output_port = self._open_port("open_output", target, "output")
        self._output_name = target

    def _open_port(self, opener_name: str, target: str, kind: str):
        if self._mido_module is None:
            detail = f" ({self._backend_error})" if self._backend_error else ""
            raise RuntimeError(f"MIDI backend not available{detail}.")
        try:
            port = getattr(self._mido_module, opener_name)(target)
        except Exception as exc:
            self._backend_error = self._format_backend_error(exc)
            raise RuntimeError(f"Could not open MIDI {kind} '{target}': {self._backend_error}") from exc
        self._backend_error = ""
        logger.info("Opened MIDI %s %r", kind, target)
        return port

    def poll(self) -> list[Any]:
        port = self._input_port
        if port is None:
            return []
        try:
            return list(port.iter_pending())
        except Exception as exc:
            logger.warning("Reading MIDI input %r failed: %s", self._input_name, exc)
            return []

    def send(self, message: Any) -> bool:
        port = self._output_port
        if port is None:
            return False
        port.send(message)
        return True

    def close(self) -> None:
        self._close_input()
        self._close_output()

    def _close_input(self) -> None:
        port = self._input_port
        self._input_port = None
        self._input_name = ""
        self._close_port(port)

    def _close_output(self) -> None:
        port = self._output_port
        self._output_port = None
        self._output_name = ""
        self._close_port(port)

    @staticmethod
    def _close_port(port) -> None:
        if port is None:
            return
        try:
            port.close()
        except Exception as exc:
            logger.debug("Ignoring error while closing MIDI port: %s", exc)
