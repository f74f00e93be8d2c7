"""Human-readable byte sizes."""

_UNITS = ("Bytes", "KB", "MB", "GB")
_STEP = 1024


def format_bytes(num_bytes: float) -> str:
    """Format a byte count using binary steps and at most two decimals.

    Trailing zeros are dropped, so ``1536`` renders as ``1.5 KB`` and
    ``2048`` as ``2 KB``. Values past the largest unit stay in GB.

    Examples:
        >>> format_bytes(0)
        '0 Bytes'
        >>> format_bytes(500000)
        '488.28 KB'
    """
    if num_bytes == 0:
        return "0 Bytes"
    if num_bytes < 0:
        return "-" + format_bytes(-num_bytes)

    value = float(num_bytes)
    unit = 0
    while value >= _STEP and unit < len(_UNITS) - 1:
        value /= _STEP
        unit += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_UNITS[unit]}"
