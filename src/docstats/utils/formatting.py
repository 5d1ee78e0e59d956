"""Human-readable formatting of sizes and counts."""

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size_bytes: int, decimals: int = 2) -> str:
    """
    Format a byte count using base-1024 units.

    Trailing zeros are dropped, so 1536 bytes is ``"1.5 KB"``.

    Args:
        size_bytes: Size in bytes
        decimals: Maximum number of decimal places

    Returns:
        Formatted size string
    """
    if size_bytes <= 0:
        return "0 Bytes"

    index = 0
    while size_bytes >= 1024 ** (index + 1) and index < len(SIZE_UNITS) - 1:
        index += 1

    value = round(size_bytes / 1024**index, decimals)
    text = f"{value:.{decimals}f}".rstrip("0").rstrip(".") if decimals else str(int(value))
    return f"{text} {SIZE_UNITS[index]}"


def format_count(value: int, group_digits: bool = True) -> str:
    """Format an integer count, optionally grouping thousands."""
    return f"{value:,}" if group_digits else str(value)
