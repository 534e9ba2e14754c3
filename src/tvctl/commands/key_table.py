"""
Key table: maps IR command codes to keyboard shortcuts.

Config file format, one entry per line:

    # comment
    /dev/ttyUSB0
    12: space          # play/pause
    13: ctrl+q

Exactly one device line is allowed. A code defined twice keeps the last
definition.
"""
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from tvctl.core.errors import ConfigLoadFailed, ConfigSyntaxError

logger = logging.getLogger(__name__)

DEVICE_PREFIX = "/dev/"


@dataclass(frozen=True)
class KeyAction:
    """Shortcut bound to a command code."""
    shortcut: str
    comment: str = ""


KeyTable = dict[int, KeyAction]


def parse_config(content: str, source: str = "<config>") -> tuple[str, KeyTable]:
    """
    Parse config text into the device path and the key table.

    Args:
        content: Full text of the config file
        source: Name used in error messages

    Returns:
        (device_path, table); device_path is "" when no device line exists

    Raises:
        ConfigSyntaxError: invalid line
    """
    port = ""
    table: KeyTable = {}

    for lineno, raw_line in enumerate(content.split("\n"), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith(DEVICE_PREFIX):
            if port:
                raise ConfigSyntaxError(
                    f"Port is already defined as {port!r}, error at line {lineno} in {source!r}"
                )
            _check_device(line, source, lineno)
            port = line
            continue

        key_part, sep, value_part = line.partition(":")
        if not sep:
            raise ConfigSyntaxError(f"Invalid config, no separator ':' in {source!r} at line {lineno}")

        key = key_part.strip()
        if not (key.isascii() and key.isdigit()):
            raise ConfigSyntaxError(f"Wrong integer value {key_part!r} in {source!r} at line {lineno}")

        shortcut, _, comment = value_part.partition("#")
        shortcut = shortcut.strip()
        if not shortcut:
            raise ConfigSyntaxError(f"Empty shortcut for code {key} in {source!r} at line {lineno}")

        code = int(key)
        if code in table:
            logger.warning(f"Code {code} redefined in {source!r} at line {lineno}, last definition wins")
        table[code] = KeyAction(shortcut=shortcut, comment=comment.strip())

    return port, table


def _check_device(path: str, source: str, lineno: int) -> None:
    try:
        mode = os.stat(path).st_mode
    except OSError as e:
        raise ConfigSyntaxError(f"Wrong port value {path!r} in {source!r}, error {e}") from e
    if not stat.S_ISCHR(mode):
        raise ConfigSyntaxError(f"{path!r} is not a valid device in {source!r} at line {lineno}")


def load_config(path: Path | str) -> tuple[str, KeyTable]:
    """Read the config file and return (device_path, table).

    Raises:
        ConfigLoadFailed: file unreadable or no device defined
        ConfigSyntaxError: invalid line
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadFailed(f"Unable to load config: {e}") from e

    port, table = parse_config(content, str(path))
    if not port:
        raise ConfigLoadFailed(f"No port defined in {str(path)!r}")

    logger.info(f"Loaded {len(table)} key bindings for {port} from {path}")
    return port, table
