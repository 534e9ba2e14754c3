import termios
import pytest
import serial
from unittest.mock import MagicMock, patch
from tvctl.hardware.serial_port import SerialPort
from tvctl.core.errors import PortOpenFailed, PortConfigFailed, PortReadFailed, PortCloseFailed


def _termios_attrs():
    return [0, 0, termios.HUPCL | termios.CS8, 0, termios.B9600, termios.B9600, [0] * 32]


def test_regular_file_is_rejected_before_open(tmp_path):
    regular_file = tmp_path / "ttyUSB0"
    regular_file.write_text("12\n")

    with patch('tvctl.hardware.serial_port.serial.Serial') as mock_serial_class:
        port = SerialPort(str(regular_file))
        with pytest.raises(PortOpenFailed, match="not a character device"):
            port.open()

        assert mock_serial_class.call_count == 0
    assert port.port is None


def test_missing_device_is_rejected(tmp_path):
    port = SerialPort(str(tmp_path / "missing"))

    with pytest.raises(PortOpenFailed):
        port.open()


def test_open_configures_line(char_device):
    with patch('tvctl.hardware.serial_port.serial.Serial') as mock_serial_class, \
         patch('tvctl.hardware.serial_port.termios.tcgetattr', return_value=_termios_attrs()), \
         patch('tvctl.hardware.serial_port.termios.tcsetattr') as mock_tcsetattr:
        mock_port = MagicMock()
        mock_serial_class.return_value = mock_port

        port = SerialPort(char_device, baud_rate=9600)
        port.open()

        expected_baudrate = 9600
        assert mock_port.port == char_device
        assert mock_port.baudrate == expected_baudrate
        assert mock_port.bytesize == serial.EIGHTBITS
        assert mock_port.parity == serial.PARITY_NONE
        assert mock_port.timeout is None
        assert mock_port.exclusive is True
        mock_port.open.assert_called_once()

        applied = mock_tcsetattr.call_args.args[2]
        assert applied[0] & termios.INPCK
        assert not applied[2] & termios.HUPCL
        assert port.port is mock_port


def test_open_failure_is_reported(char_device):
    with patch('tvctl.hardware.serial_port.serial.Serial') as mock_serial_class:
        mock_serial_class.return_value.open.side_effect = serial.SerialException("busy")

        with pytest.raises(PortOpenFailed, match="busy"):
            SerialPort(char_device).open()


def test_config_failure_closes_port(char_device):
    with patch('tvctl.hardware.serial_port.serial.Serial') as mock_serial_class, \
         patch('tvctl.hardware.serial_port.termios.tcgetattr', side_effect=termios.error(25, "not a tty")):
        mock_port = MagicMock()
        mock_serial_class.return_value = mock_port

        port = SerialPort(char_device)
        with pytest.raises(PortConfigFailed):
            port.open()

        mock_port.close.assert_called_once()
        assert port.port is None


def test_read_line_returns_data():
    port = SerialPort("/dev/ttyUSB0")
    port.port = MagicMock()
    port.port.readline.return_value = b"12\n"

    assert port.read_line() == b"12\n"


def test_read_line_empty_means_disconnected():
    port = SerialPort("/dev/ttyUSB0")
    port.port = MagicMock()
    port.port.readline.return_value = b""

    with pytest.raises(PortReadFailed):
        port.read_line()


def test_read_line_serial_error():
    port = SerialPort("/dev/ttyUSB0")
    port.port = MagicMock()
    port.port.readline.side_effect = serial.SerialException("device disconnected")

    with pytest.raises(PortReadFailed, match="device disconnected"):
        port.read_line()


def test_close_releases_handle_once():
    port = SerialPort("/dev/ttyUSB0")
    mock_port = MagicMock()
    port.port = mock_port

    port.close()
    port.close()

    mock_port.close.assert_called_once()
    assert port.port is None


def test_close_failure():
    port = SerialPort("/dev/ttyUSB0")
    port.port = MagicMock()
    port.port.close.side_effect = OSError(5, "I/O error")

    with pytest.raises(PortCloseFailed):
        port.close()
