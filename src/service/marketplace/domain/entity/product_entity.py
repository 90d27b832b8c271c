"""Product entity."""

from decimal import Decimal
from typing import Any, Optional

import attrs

from src.service.marketplace.domain.validators import NumericValidators, StringValidators


@attrs.define
class Product:
    """
    Catalog record.

    `price > 0` and `quantity >= 0` hold for every instance: validators run at
    construction and again on every attribute assignment.
    """

    name: str = attrs.field(validator=StringValidators.validate_name)
    description: str = attrs.field(validator=StringValidators.validate_description)
    price: Decimal = attrs.field(
        converter=NumericValidators.to_price, validator=NumericValidators.validate_positive_price
    )
    quantity: int = attrs.field(validator=NumericValidators.validate_non_negative_quantity)
    seller_id: int = attrs.field(validator=attrs.validators.instance_of(int))
    id: Optional[int] = None

    @classmethod
    def create(
        cls, *, name: str, description: str, price: Any, quantity: int, seller_id: int
    ) -> 'Product':
        return cls(
            name=name,
            description=description,
            price=price,
            quantity=quantity,
            seller_id=seller_id,
            id=None,
        )
