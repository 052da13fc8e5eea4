"""Human-readable storage figures for admin and command output."""

from typing import Final

_UNIT_BASE: Final = 1024
_UNITS: Final = ('Bytes', 'KB', 'MB', 'GB')


def format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Sizes are rounded to two decimals; GB is the largest unit.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '0 Bytes', '1.5 KB', '1024 GB').
    """
    if size_bytes <= 0:
        return '0 Bytes'

    exponent = 0
    while (
        exponent < len(_UNITS) - 1
        and size_bytes >= _UNIT_BASE ** (exponent + 1)
    ):
        exponent += 1

    scaled = round(size_bytes / _UNIT_BASE ** exponent, 2)
    number = f'{scaled:.2f}'.rstrip('0').rstrip('.')
    return f'{number} {_UNITS[exponent]}'
