"""Small helpers for presenting files."""

UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def format_bytes(size: int, decimals: int = 2) -> str:
    """Human-readable size, e.g. ``1536`` -> ``'1.5 KB'``."""
    if size <= 0:
        return "0 Bytes"

    index = 0
    while size >= 1024 ** (index + 1) and index < len(UNITS) - 1:
        index += 1
    value = round(size / (1024 ** index), decimals)
    # Drop trailing zeros: 2.50 -> 2.5, 3.00 -> 3
    return f"{value:g} {UNITS[index]}"
