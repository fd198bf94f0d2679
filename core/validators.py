"""
Core — Input Validators

Local validation run by the service layer before any write. Each helper
returns the normalised value or raises InvalidInputError.

@file core/validators.py
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from django.utils.dateparse import parse_date

from core.constants import MONEY_PLACES, PRICE_MAX_DIGITS
from core.exceptions import InvalidInputError

_CENT = Decimal(1).scaleb(-MONEY_PLACES)
_PRICE_LIMIT = Decimal(10) ** (PRICE_MAX_DIGITS - MONEY_PLACES)


def clean_text(value, field: str, max_length: int = None) -> str:
    if value is None or not str(value).strip():
        raise InvalidInputError(detail=f'{field} is required.')
    text = str(value).strip()
    if max_length is not None and len(text) > max_length:
        raise InvalidInputError(detail=f'{field} must be at most {max_length} characters.')
    return text


def clean_quantity(value, *, minimum: int = 0, field: str = 'Quantity') -> int:
    """Integer quantity >= minimum. Booleans and fractional values are rejected."""
    if value is None or value == '' or isinstance(value, bool):
        raise InvalidInputError(detail=f'{field} is required.')
    if isinstance(value, str):
        value = value.strip()
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        raise InvalidInputError(detail=f'{field} must be an integer.')
    if isinstance(value, (float, Decimal)) and quantity != value:
        raise InvalidInputError(detail=f'{field} must be an integer.')
    if quantity < minimum:
        if minimum == 1:
            raise InvalidInputError(detail=f'{field} must be positive.')
        raise InvalidInputError(detail=f'{field} must be non-negative.')
    return quantity


def clean_price(value, field: str = 'Unit price') -> Decimal:
    """Finite, non-negative money amount quantized to cents, within the column's range."""
    if value is None or value == '' or isinstance(value, bool):
        raise InvalidInputError(detail=f'{field} is required.')
    try:
        price = Decimal(str(value).strip())
        if not price.is_finite():
            raise InvalidInputError(detail=f'{field} must be a number.')
        if price < 0:
            raise InvalidInputError(detail=f'{field} must be non-negative.')
        if price >= _PRICE_LIMIT:
            raise InvalidInputError(detail=f'{field} must be less than {_PRICE_LIMIT}.')
        price = price.quantize(_CENT)
        if price >= _PRICE_LIMIT:
            raise InvalidInputError(detail=f'{field} must be less than {_PRICE_LIMIT}.')
        return price
    except (InvalidOperation, ValueError):
        raise InvalidInputError(detail=f'{field} must be a number.')


def clean_date(value, field: str = 'Date') -> date:
    """Calendar date from a date object or an ISO 'YYYY-MM-DD' string."""
    if value is None or value == '':
        raise InvalidInputError(detail=f'{field} is required.')
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        parsed = parse_date(str(value).strip())
    except ValueError:
        parsed = None
    if parsed is None:
        raise InvalidInputError(detail=f'{field} must be a valid date (YYYY-MM-DD).')
    return parsed
