"""
Money helpers shared by the calculator, the invoice assembler and the
vehicle catalog.

All amounts are ``Decimal`` euros. Floats are converted through ``str()``
so that ``0.1`` stays ``Decimal('0.1')`` instead of its binary expansion.
Rounding happens only through ``to_money()``, always ROUND_HALF_UP to cents.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .exceptions import InvalidAmountError

CENT = Decimal('0.01')
ZERO = Decimal('0.00')

# Largest exponent that still fits a DecimalField(max_digits=12, decimal_places=2)
MAX_EXPONENT = 9


def to_decimal(value, field='amount', *, allow_negative=False):
    """
    Parse a monetary input into an exact ``Decimal``.

    Args:
        value: int, float, str or Decimal. ``None`` and ``''`` mean zero.
        field: Name reported in the error when the value is rejected.
        allow_negative: Accept values below zero (used for derived
            figures such as profit, never for raw inputs).

    Returns:
        Decimal: The parsed amount, not rounded.

    Raises:
        InvalidAmountError: If the value is not a finite number, or is
            negative while ``allow_negative`` is False,
            or has more than ten integer digits.
    """
    if value is None or value == '':
        return ZERO
    if isinstance(value, bool):
        raise InvalidAmountError(field, 'Amount must be a number')

    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, float):
            amount = Decimal(str(value))
        else:
            amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(field, f'Not a number: {value!r}')

    if not amount.is_finite():
        raise InvalidAmountError(field, 'Amount must be finite')
    if amount < 0 and not allow_negative:
        raise InvalidAmountError(field, 'Amount cannot be negative')
    if amount and amount.adjusted() > MAX_EXPONENT:
        raise InvalidAmountError(field, 'Amount too large')

    return amount


def to_money(value):
    """Round an amount half-up to whole cents."""
    if value is None:
        return None
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(amount, decimals=2):
    """
    Format an amount the Dutch way: ``€ 1.234,56``.

    Args:
        amount: Decimal, int, float or numeric string.
        decimals: Number of fraction digits (0 for catalog prices).

    Returns:
        str: Formatted amount with euro sign, thousands separated by
        dots and decimals by a comma.
    """
    quantum = Decimal(1).scaleb(-decimals)
    value = Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP)

    sign = '-' if value < 0 else ''
    text = f'{abs(value):,.{decimals}f}'
    # en-US grouping -> nl-NL grouping
    text = text.replace(',', '_').replace('.', ',').replace('_', '.')
    return f'€ {sign}{text}'
