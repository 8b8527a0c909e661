from decimal import Decimal, ROUND_HALF_UP

from config.settings import SUPPORTED_PRECISIONS

_QUANTUMS = {p: Decimal(1).scaleb(-p) for p in SUPPORTED_PRECISIONS}


def round_amount(amount: Decimal, precision: int) -> Decimal:
    """Round half up to 0, 1 or 2 fraction digits"""
    try:
        quantum = _QUANTUMS[precision]
    except KeyError:
        raise ValueError(f"Unsupported precision {precision!r}, expected one of {SUPPORTED_PRECISIONS}")
    return amount.quantize(quantum, rounding=ROUND_HALF_UP)
