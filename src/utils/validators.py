from decimal import Decimal, InvalidOperation

from config.settings import (
    SUPPORTED_PRECISIONS, HOUSING_FUND_RATE_MIN, HOUSING_FUND_RATE_MAX
)


def sanitize_amount(value) -> Decimal:
    """Coerce raw form input to a nonnegative amount, anything unusable becomes 0"""
    if value is None or isinstance(value, bool):
        return Decimal('0')
    try:
        amount = Decimal(str(value).strip().replace(',', ''))
    except InvalidOperation:
        return Decimal('0')
    if not amount.is_finite() or amount < 0:
        return Decimal('0')
    return amount


def validate_precision(precision) -> bool:
    """Validate display precision is 0, 1 or 2 fraction digits"""
    return not isinstance(precision, bool) and precision in SUPPORTED_PRECISIONS


def validate_housing_fund_rate(rate: Decimal) -> bool:
    """Validate housing fund rate is within policy bounds"""
    return HOUSING_FUND_RATE_MIN <= Decimal(str(rate)) <= HOUSING_FUND_RATE_MAX


def validate_year_month(year: int, month: int) -> bool:
    return 1 <= month <= 12 and 1900 <= year <= 9999
