"""Checkout form and the states a checkout attempt moves through."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import ValidationError

_CARD_NUMBER = re.compile(r"[0-9]{16}")
_EXPIRY = re.compile(r"[0-9]{2}/[0-9]{2}")
_CVV = re.compile(r"[0-9]{3,4}")


class CheckoutState(Enum):
    FORM_ENTRY = "form_entry"
    VALIDATING = "validating"
    PRICING = "pricing"
    PERSISTING = "persisting"
    COMPLETED = "completed"
    FAILED = "failed"
    # an order exists but could neither be finished nor rolled back
    PARTIALLY_COMMITTED = "partially_committed"


def _check_length(value: str, field: str, low: int, high: int, message: str) -> None:
    if not low <= len(value) <= high:
        raise ValidationError(message, field=field)


def _check_pattern(value: str, field: str, pattern: re.Pattern, message: str) -> None:
    if not pattern.fullmatch(value):
        raise ValidationError(message, field=field)


@dataclass(frozen=True)
class CheckoutForm:
    """Shipping and payment fields entered at checkout.

    Fields are checked in declaration order and the first violation is
    raised, so a constructed form is always fully valid. Payment fields
    are only checked for shape; they are never stored or sent anywhere.
    """

    address: str
    city: str
    zip_code: str
    card_number: str
    card_name: str
    expiry: str
    cvv: str

    def __post_init__(self) -> None:
        _check_length(
            self.address, "address", 10, 200, "Address must be at least 10 characters"
        )
        _check_length(self.city, "city", 2, 100, "City is required")
        _check_length(self.zip_code, "zip_code", 5, 10, "Valid zip code required")
        _check_pattern(
            self.card_number, "card_number", _CARD_NUMBER, "Card number must be 16 digits"
        )
        _check_length(self.card_name, "card_name", 3, 100, "Cardholder name required")
        _check_pattern(self.expiry, "expiry", _EXPIRY, "Format: MM/YY")
        _check_pattern(self.cvv, "cvv", _CVV, "CVV must be 3-4 digits")

    def __repr__(self) -> str:
        return (
            f"CheckoutForm(city={self.city!r}, zip_code={self.zip_code!r}, "
            f"card_number='****{self.card_number[-4:]}')"
        )
