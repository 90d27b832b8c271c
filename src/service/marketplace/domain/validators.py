"""Domain validation utilities shared by the user and product entities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Any

from src.platform.exception.exceptions import ValidationError


EMAIL_PATTERN = re.compile(r'[A-Za-z0-9+_.-]+@.+')

# product.price is Numeric(10, 2), product.quantity a 32-bit Integer
PRICE_DECIMAL_PLACES = 2
MAX_PRICE = Decimal('99999999.99')
MAX_QUANTITY = 2**31 - 1


class StringValidators:
    """Common string validation functions."""

    @staticmethod
    def validate_required_string(value: Any, field_name: str) -> None:
        """Validate that a string is not empty or whitespace-only."""
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f'{field_name} cannot be empty')

    @staticmethod
    def validate_email_format(value: Any) -> None:
        if not isinstance(value, str) or not EMAIL_PATTERN.fullmatch(value):
            raise ValidationError('Invalid email format')

    @staticmethod
    def validate_username(_instance: Any, _attribute: Any, value: str) -> None:
        """attrs validator"""
        StringValidators.validate_required_string(value, 'Username')

    @staticmethod
    def validate_email(_instance: Any, _attribute: Any, value: str) -> None:
        """attrs validator"""
        StringValidators.validate_email_format(value)

    @staticmethod
    def validate_name(_instance: Any, _attribute: Any, value: str) -> None:
        """attrs validator"""
        StringValidators.validate_required_string(value, 'Product name')

    @staticmethod
    def validate_description(_instance: Any, _attribute: Any, value: str) -> None:
        """attrs validator"""
        StringValidators.validate_required_string(value, 'Product description')


class NumericValidators:
    """Common numeric validation functions."""

    @staticmethod
    def to_price(value: Any) -> Decimal:
        """Convert int/str/float/Decimal input to Decimal (attrs converter)."""
        if isinstance(value, bool):
            raise ValidationError('Price must be a number')
        if isinstance(value, Decimal):
            price = value
        else:
            try:
                # floats go through str() so 9.99 stays 9.99 instead of its binary expansion
                price = Decimal(str(value) if isinstance(value, float) else value)
            except (InvalidOperation, TypeError, ValueError):
                raise ValidationError('Price must be a number')
        if not price.is_finite():
            raise ValidationError('Price must be a number')
        # must fit the Numeric(10, 2) column without rounding
        if price.normalize().as_tuple().exponent < -PRICE_DECIMAL_PLACES:
            raise ValidationError(
                f'Price cannot have more than {PRICE_DECIMAL_PLACES} decimal places'
            )
        if price > MAX_PRICE:
            raise ValidationError(f'Price cannot exceed {MAX_PRICE}')
        return price

    @staticmethod
    def validate_positive_price(_instance: Any, _attribute: Any, value: Decimal) -> None:
        if value <= 0:
            raise ValidationError('Price must be greater than 0')

    @staticmethod
    def validate_quantity(value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError('Quantity must be an integer')
        if value < 0:
            raise ValidationError('Quantity cannot be negative')
        if value > MAX_QUANTITY:
            raise ValidationError(f'Quantity cannot exceed {MAX_QUANTITY}')

    @staticmethod
    def validate_non_negative_quantity(_instance: Any, _attribute: Any, value: int) -> None:
        """attrs validator"""
        NumericValidators.validate_quantity(value)
