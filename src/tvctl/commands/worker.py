import logging
import threading
from typing import Protocol

from tvctl.commands.debounce import DebounceGate
from tvctl.commands.decoder import decode_code
from tvctl.commands.dispatcher import Dispatcher
from tvctl.core.errors import TvctlError

logger = logging.getLogger(__name__)


class LineSource(Protocol):
    def read_line(self) -> bytes: ...


class CommandWorker:
    """Single background worker reading codes from the port.

    Debug mode prints every received code. Live mode debounces every code
    before the table lookup and sends the mapped shortcut.
    """

    def __init__(
        self,
        port: LineSource,
        dispatcher: Dispatcher,
        gate: DebounceGate | None = None,
        shutdown: threading.Event | None = None,
    ):
        self.port = port
        self.dispatcher = dispatcher
        self.gate = gate
        self.shutdown = shutdown or threading.Event()
        self.error: Exception | None = None
        self._stopped = threading.Event()

    def stop(self) -> None:
        """Ask the loop to exit before its next read."""
        self._stopped.set()

    def show_codes(self) -> None:
        logger.info("=== Showing received codes ===")
        while not self._stopped.is_set():
            code = decode_code(self.port.read_line())
            self.dispatcher.show(code)

    def process_commands(self) -> None:
        logger.info("=== Processing remote commands ===")
        gate = self.gate or DebounceGate()
        while not self._stopped.is_set():
            code = decode_code(self.port.read_line())
            if not gate.accept():
                logger.debug(f"Suppressed repeated {code=}")
                continue
            self.dispatcher.dispatch(code)

    def run(self, debug: bool = False) -> None:
        """Thread target: run one loop until stopped or failed."""
        try:
            if debug:
                self.show_codes()
            else:
                self.process_commands()
        except Exception as e:
            if self._stopped.is_set():
                # Port closed under a pending read during shutdown
                logger.debug(f"Worker exited after stop: {e}")
                return
            if not isinstance(e, TvctlError):
                logger.error(f"Critical error in worker loop: {e}", exc_info=True)
            self.error = e
        finally:
            self.shutdown.set()
