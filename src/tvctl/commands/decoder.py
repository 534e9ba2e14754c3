from tvctl.core.errors import MalformedCode

# Largest accepted code, the range of a signed 64-bit integer
MAX_CODE = 2**63 - 1


def decode_code(raw: bytes) -> int:
    """Turn one line received from the device into a command code."""
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise MalformedCode(f"Invalid code value {raw!r}: {e}") from e

    value = text.strip()
    if not value.isdigit():
        raise MalformedCode(f"Invalid code value {text!r}")

    # Length check first, int() refuses very long digit strings
    if len(value) > len(str(MAX_CODE)) or int(value) > MAX_CODE:
        raise MalformedCode(f"Invalid code value {text!r}: out of range")
    return int(value)
