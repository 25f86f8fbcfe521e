"""
Utility functions for Coin Dashboard.
"""

PLACEHOLDER = "-"


def format_currency(value: float | None) -> str:
    """
    Format a USD amount with thousands separators and two decimals.

    Args:
        value: Amount in USD.

    Returns:
        Formatted string such as "$1,234.57" or "-$0.50".
    """
    if value is None:
        return PLACEHOLDER

    try:
        val = float(value)
    except (ValueError, TypeError):
        return PLACEHOLDER

    sign = "-" if val < 0 else ""
    return f"{sign}${abs(val):,.2f}"


def format_large_number(value: float | None) -> str:
    """
    Abbreviate a large number with a B/M/K suffix.

    Values below one thousand are returned as-is.
    """
    if value is None:
        return PLACEHOLDER

    try:
        val = float(value)
    except (ValueError, TypeError):
        return PLACEHOLDER

    if val >= 1_000_000_000:
        return f"{val / 1_000_000_000:.2f}B"
    elif val >= 1_000_000:
        return f"{val / 1_000_000:.2f}M"
    elif val >= 1_000:
        return f"{val / 1_000:.2f}K"

    if val.is_integer():
        return str(int(val))
    return str(val)


def format_percentage(value: float | None) -> str:
    """Format a percentage with two decimals, e.g. "-3.14%"."""
    if value is None:
        return PLACEHOLDER

    try:
        return f"{float(value):.2f}%"
    except (ValueError, TypeError):
        return PLACEHOLDER


def format_change(value: float | None) -> str:
    """24h change with a direction arrow, e.g. "▲ 2.50%"."""
    if value is None:
        return PLACEHOLDER

    percentage = format_percentage(value)
    if percentage == PLACEHOLDER:
        return PLACEHOLDER
    arrow = "▲" if float(value) >= 0 else "▼"
    return f"{arrow} {percentage}"


def format_usd_compact(value: float | None) -> str:
    """Abbreviated USD amount such as "$1.23B"."""
    number = format_large_number(value)
    if number == PLACEHOLDER:
        return PLACEHOLDER
    return f"${number}"
