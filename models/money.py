from decimal import Decimal, ROUND_HALF_UP

TWOPLACES = Decimal("0.01")


def to_money(value):
    """Quantize a Decimal/str/number to two decimal places."""
    d = value if isinstance(value, Decimal) else Decimal(str(value))
    return d.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def money_to_float(value):
    if value is None:
        return None
    return float(to_money(value))
