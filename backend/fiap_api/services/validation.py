"""
Field validation helpers shared by the services

Validators append ErrorDetail entries to a list instead of raising, so a
request reports every invalid field at once.

Bounds follow the table columns: text fields are String(255) and money
columns are DECIMAL(12, 2).
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from fiap_api.core.errors import ErrorDetail, ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MAX_TEXT_LENGTH = 255
MAX_AMOUNT = Decimal("9999999999.99")
AMOUNT_PLACES = 2
MAX_QUANTITY = 1000


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require(errors: List[ErrorDetail], field: str, value: Any) -> bool:
    """Record a 'required' error when value is missing or blank"""
    if is_blank(value):
        errors.append(ErrorDetail("required", {"field": field}))
        return False
    return True


def check_length(errors: List[ErrorDetail], field: str, value: str, max_length: int = MAX_TEXT_LENGTH) -> Optional[str]:
    """Stripped value, or None (with an error) when longer than max_length"""
    text = value.strip()
    if len(text) > max_length:
        errors.append(ErrorDetail("too_long", {"field": field, "max": max_length}))
        return None
    return text


def normalize_cpf(value: str) -> Optional[str]:
    """Strip punctuation from a CPF; None unless exactly 11 digits remain"""
    digits = re.sub(r"[.\-\s/]", "", str(value))
    if len(digits) != 11 or not digits.isdigit():
        return None
    return digits


def check_email(errors: List[ErrorDetail], field: str, value: str) -> Optional[str]:
    email = check_length(errors, field, value)
    if email is None:
        return None
    if not EMAIL_PATTERN.match(email):
        errors.append(ErrorDetail("invalid_email", {"field": field}))
        return None
    return email


def check_cpf(errors: List[ErrorDetail], field: str, value: str) -> Optional[str]:
    cpf = normalize_cpf(value)
    if cpf is None:
        errors.append(ErrorDetail("invalid_cpf", {"field": field}))
    return cpf


def check_amount(errors: List[ErrorDetail], field: str, value: Any) -> Optional[Decimal]:
    """
    Parse a money value: greater than zero, at most MAX_AMOUNT and
    AMOUNT_PLACES decimal places
    """
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        errors.append(ErrorDetail("invalid_value", {"field": field}))
        return None
    if not amount.is_finite():
        errors.append(ErrorDetail("invalid_value", {"field": field}))
        return None
    if amount <= 0:
        errors.append(ErrorDetail("must_be_positive", {"field": field}))
        return None
    if amount > MAX_AMOUNT:
        errors.append(ErrorDetail("must_be_at_most", {"field": field, "max": MAX_AMOUNT}))
        return None
    if amount != amount.quantize(Decimal(1).scaleb(-AMOUNT_PLACES)):
        errors.append(ErrorDetail("too_many_decimals", {"field": field, "places": AMOUNT_PLACES}))
        return None
    return amount


def check_quantity(errors: List[ErrorDetail], field: str, value: int) -> Optional[int]:
    if value < 1:
        errors.append(ErrorDetail("must_be_positive", {"field": field}))
        return None
    if value > MAX_QUANTITY:
        errors.append(ErrorDetail("must_be_at_most", {"field": field, "max": MAX_QUANTITY}))
        return None
    return value


def raise_if_errors(errors: List[ErrorDetail]) -> None:
    if errors:
        raise ValidationError(errors)
