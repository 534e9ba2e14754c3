import logging
import sys
from typing import TextIO

from tvctl.commands.key_table import KeyTable
from tvctl.hardware.key_injector import ActionInvoker

logger = logging.getLogger(__name__)


class Dispatcher:
    """Looks codes up in the key table and reports or sends the shortcut."""

    def __init__(self, table: KeyTable, invoker: ActionInvoker, output: TextIO | None = None):
        self.table = table
        self.invoker = invoker
        self.output = output or sys.stdout

    def describe(self, code: int) -> str:
        """Format a code the way it would be written in the config file."""
        key = self.table.get(code)
        if key is None:
            return f"{code}: ?  # ?"
        if not key.comment:
            return f"{code}: {key.shortcut}"
        return f"{code}: {key.shortcut}  # {key.comment}"

    def show(self, code: int) -> None:
        print(self.describe(code), file=self.output, flush=True)

    def dispatch(self, code: int) -> bool:
        """
        Send the shortcut bound to a code.

        Returns:
            True if a shortcut was sent, False for an unmapped code
        """
        key = self.table.get(code)
        if key is None:
            logger.debug(f"Ignoring unmapped {code=}")
            return False

        logger.info(f"Sending {key.shortcut!r} for {code=}")
        self.invoker.send(key.shortcut)
        return True
