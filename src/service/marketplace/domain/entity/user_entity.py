from enum import Enum
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import ValidationError
from src.service.marketplace.domain.validators import StringValidators


class UserRole(str, Enum):
    BUYER = 'buyer'
    SELLER = 'seller'
    ADMIN = 'admin'

    @classmethod
    def from_value(cls, value: Any) -> 'UserRole':
        """Case-insensitive role parsing ('SELLER', 'Seller' and 'seller' are the same role)"""
        if isinstance(value, UserRole):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        valid_roles = ', '.join(role.value for role in cls)
        raise ValidationError(f'Invalid role: {value}. Must be one of: {valid_roles}')


@attrs.define
class UserEntity:
    username: str = attrs.field(validator=StringValidators.validate_username)
    email: str = attrs.field(validator=StringValidators.validate_email)
    password_hash: str = attrs.field(
        default='', repr=False, validator=attrs.validators.instance_of(str)
    )  # Hide from repr for security
    role: UserRole = attrs.field(default=UserRole.BUYER, converter=UserRole.from_value)
    id: Optional[int] = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @staticmethod
    def validate_password(plain_password: Any) -> None:
        StringValidators.validate_required_string(plain_password, 'Password')
