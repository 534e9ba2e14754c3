"""Serial port management for the IR receiver link."""
import logging
import os
import stat
import termios

import serial

from tvctl.core.config import daemon_config
from tvctl.core.errors import PortOpenFailed, PortConfigFailed, PortReadFailed, PortCloseFailed

logger = logging.getLogger(__name__)

# Index of c_iflag / c_cflag in the list returned by termios.tcgetattr
IFLAG = 0
CFLAG = 2


class SerialPort:
    """Owns the read side of the serial link to the IR receiver."""

    def __init__(self, device_path: str, baud_rate: int | None = None):
        self.device_path = device_path
        self.baud_rate = baud_rate or daemon_config.baud_rate
        self.port: serial.Serial | None = None

    def open(self) -> None:
        """Open the device in raw mode, 8N1 with parity checking enabled.

        Raises:
            PortOpenFailed: path missing, not a character device or not openable
            PortConfigFailed: line discipline could not be applied
        """
        try:
            mode = os.stat(self.device_path).st_mode
        except OSError as e:
            raise PortOpenFailed(f"Unable open port {self.device_path!r}: {e}") from e
        if not stat.S_ISCHR(mode):
            raise PortOpenFailed(f"{self.device_path!r} is not a character device")

        port = serial.Serial()
        port.port = self.device_path
        port.baudrate = self.baud_rate
        port.bytesize = serial.EIGHTBITS
        port.parity = serial.PARITY_NONE
        port.stopbits = serial.STOPBITS_ONE
        port.xonxoff = False
        port.rtscts = False
        port.timeout = None
        port.exclusive = True

        try:
            port.open()
        except (serial.SerialException, OSError, ValueError) as e:
            raise PortOpenFailed(f"Unable open port {self.device_path!r}: {e}") from e

        try:
            self._apply_line_flags(port)
        except (termios.error, OSError) as e:
            try:
                port.close()
            except (serial.SerialException, OSError) as close_error:
                raise PortCloseFailed(f"Unable close port {self.device_path!r}: {close_error}") from close_error
            raise PortConfigFailed(f"Unable set flags on {self.device_path!r}: {e}") from e

        self.port = port
        logger.info(f"Opened {self.device_path} at {self.baud_rate} baud")

    @staticmethod
    def _apply_line_flags(port: serial.Serial) -> None:
        # pyserial already sets raw mode, CLOCAL|CREAD and VMIN=1/VTIME=0
        attrs = termios.tcgetattr(port.fileno())
        attrs[IFLAG] |= termios.INPCK
        attrs[CFLAG] &= ~termios.HUPCL
        termios.tcsetattr(port.fileno(), termios.TCSANOW, attrs)

    def read_line(self) -> bytes:
        """Block until the device delivers one line.

        Raises:
            PortReadFailed: I/O error or the device went away
        """
        if self.port is None:
            raise RuntimeError("Port not opened. Call open() first.")

        try:
            data = self.port.readline()
        except (serial.SerialException, OSError) as e:
            raise PortReadFailed(f"Unable to read: {e}") from e
        if not data:
            raise PortReadFailed(f"Unable to read: {self.device_path} returned no data")
        return data

    def close(self) -> None:
        """Release the device handle."""
        if self.port is None:
            return

        port, self.port = self.port, None
        try:
            port.close()
        except (serial.SerialException, OSError) as e:
            raise PortCloseFailed(f"Unable close port {self.device_path!r}: {e}") from e
        logger.info(f"Closed {self.device_path}")

    def __enter__(self):
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
