"""
Fixed-point token amounts.

Human amounts ("10", "1.12") are scaled by 10**decimals into integer base
units, the same way ether maps to wei. Floats are refused: 8.88 has no exact
binary representation.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext

DEFAULT_DECIMALS = 18

# uint256 needs 78 significant digits
_PRECISION = 80

Amount = Decimal | int | str


def parse_amount(value: Amount) -> Decimal:
    """Parse a human amount into a Decimal."""
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Amount must be int, str or Decimal, got {type(value).__name__}")

    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount: {value!r}") from e

    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    if amount < 0:
        raise ValueError(f"Amount must not be negative: {value!r}")
    return amount


def to_base_units(value: Amount, decimals: int = DEFAULT_DECIMALS) -> int:
    """
    Convert a human amount to integer base units.

    Raises:
        ValueError: amount is negative, malformed, or finer than the
            token's decimals allow.
    """
    amount = parse_amount(value)
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = amount.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"Amount {value!r} has more than {decimals} decimal places")
        return int(scaled)


def from_base_units(value: int, decimals: int = DEFAULT_DECIMALS) -> Decimal:
    """Convert integer base units back to a human amount."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(int(value)).scaleb(-decimals)


def format_amount(value: int, decimals: int = DEFAULT_DECIMALS) -> str:
    """Render base units as a plain decimal string without trailing zeros."""
    amount = from_base_units(value, decimals)
    text = f"{amount:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
