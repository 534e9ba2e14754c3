import logging
import socket

from tvctl.core.config import service_config
from tvctl.core.errors import ReadinessNotifyFailed

logger = logging.getLogger(__name__)

READY_MESSAGE = b"READY=1"


def notify_ready(socket_path: str | None = None) -> bool:
    """
    Tell the service manager that startup is complete.

    Args:
        socket_path: Datagram socket address, defaults to NOTIFY_SOCKET.
            A leading '@' selects the abstract namespace.

    Returns:
        True if the notification was sent, False if no socket is configured
    """
    path = socket_path if socket_path is not None else service_config.notify_socket
    if not path:
        logger.debug("No notify socket configured, skipping readiness notification")
        return False

    address = "\0" + path[1:] if path.startswith("@") else path
    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM) as sock:
            sock.connect(address)
            sock.sendall(READY_MESSAGE)
    except OSError as e:
        raise ReadinessNotifyFailed(f"Unable send notify to {path!r}: {e}") from e

    logger.info(f"Readiness notification sent to {path=}")
    return True
