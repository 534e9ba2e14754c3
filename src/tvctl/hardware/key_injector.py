import logging
import subprocess
from typing import Protocol, Sequence

from tvctl.core.config import daemon_config
from tvctl.core.errors import ExternalActionFailed

logger = logging.getLogger(__name__)


class ActionInvoker(Protocol):
    def send(self, shortcut: str) -> None: ...


class KeyInjector:
    """Sends keyboard shortcuts through an external tool (xdotool by default)."""

    def __init__(self, command: Sequence[str] | None = None):
        self.command = list(command or daemon_config.injector_command)

    def send(self, shortcut: str) -> None:
        """
        Run the injection command for one shortcut and wait for it.

        Args:
            shortcut: Key name understood by the tool, e.g. "ctrl+q"

        Raises:
            ExternalActionFailed: the tool could not be started or exited non-zero
        """
        args = [*self.command, shortcut]
        logger.debug(f"Running {args=}")
        try:
            subprocess.run(args, check=True)
        except subprocess.CalledProcessError as e:
            raise ExternalActionFailed(
                f"Unable send shortcut {shortcut!r}: {self.command[0]} exited with status {e.returncode}"
            ) from e
        except OSError as e:
            raise ExternalActionFailed(f"Unable send shortcut {shortcut!r}: {e}") from e
