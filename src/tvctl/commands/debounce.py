import time
from typing import Callable

from tvctl.core.config import daemon_config


class DebounceGate:
    """Drops codes arriving within the quiet interval of the last accepted one."""

    def __init__(self, quiet_interval: float | None = None, clock: Callable[[], float] = time.monotonic):
        self.quiet_interval = daemon_config.repeat_delay if quiet_interval is None else quiet_interval
        self.clock = clock
        # The window starts when the gate is created, not at the first code
        self.last_accepted = clock()

    def accept(self, now: float | None = None) -> bool:
        """
        Check a newly received code against the quiet interval.

        Args:
            now: Arrival time, read from the clock when omitted

        Returns:
            True if the code passes, False if it is suppressed
        """
        if now is None:
            now = self.clock()
        if now - self.last_accepted < self.quiet_interval:
            return False
        self.last_accepted = now
        return True
