from decimal import Decimal


def format_money(amount: Decimal, precision: int = 0) -> str:
    """Format amount with thousands separators and fixed fraction digits"""
    return f"{amount:,.{precision}f}"


def format_percent(rate: Decimal) -> str:
    """Format a fraction as a whole percentage, 0.03 -> 3%"""
    return f"{rate * 100:.0f}%"
