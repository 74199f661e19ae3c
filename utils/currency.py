def format_currency(amount: float, symbol: str = "$") -> str:
    """Format a float as currency string, e.g. '$1,234.56'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def round_half_up(value: float) -> int:
    """Round a non-negative value to an integer, halves upward (12.5 -> 13)."""
    return int(value + 0.5)
