from decimal import Decimal

import pytest

from src.platform.exception.exceptions import ValidationError
from src.service.marketplace.domain.entity.product_entity import Product


def _product(**overrides: object) -> Product:
    fields: dict[str, object] = {
        'name': 'Widget',
        'description': 'A widget',
        'price': '9.99',
        'quantity': 5,
        'seller_id': 1,
    }
    fields.update(overrides)
    return Product.create(**fields)  # type: ignore[arg-type]


@pytest.mark.unit
class TestProductInvariants:
    def test_create_builds_transient_product(self) -> None:
        product = _product()

        assert product.id is None
        assert product.price == Decimal('9.99')
        assert product.quantity == 5
        assert product.seller_id == 1

    @pytest.mark.parametrize('price', [0, '0', -1, '-0.01', Decimal('0.00')])
    def test_non_positive_price_is_rejected(self, price: object) -> None:
        with pytest.raises(ValidationError, match='Price must be greater than 0'):
            _product(price=price)

    def test_smallest_positive_price_and_zero_quantity_are_accepted(self) -> None:
        product = _product(price=0.01, quantity=0)

        assert product.price == Decimal('0.01')
        assert product.quantity == 0

    def test_float_price_keeps_its_decimal_form(self) -> None:
        assert _product(price=9.99).price == Decimal('9.99')

    @pytest.mark.parametrize('price', ['abc', None, True, float('nan'), float('inf')])
    def test_non_numeric_price_is_rejected(self, price: object) -> None:
        with pytest.raises(ValidationError, match='Price must be a number'):
            _product(price=price)

    def test_negative_quantity_is_rejected(self) -> None:
        with pytest.raises(ValidationError, match='Quantity cannot be negative'):
            _product(quantity=-1)

    @pytest.mark.parametrize('quantity', [1.5, '3', True])
    def test_non_integer_quantity_is_rejected(self, quantity: object) -> None:
        with pytest.raises(ValidationError, match='Quantity must be an integer'):
            _product(quantity=quantity)

    @pytest.mark.parametrize('field', ['name', 'description'])
    @pytest.mark.parametrize('value', ['', '   '])
    def test_blank_text_fields_are_rejected(self, field: str, value: str) -> None:
        with pytest.raises(ValidationError, match='cannot be empty'):
            _product(**{field: value})

    def test_assignment_keeps_invariants(self) -> None:
        product = _product()

        with pytest.raises(ValidationError):
            product.quantity = -3
        with pytest.raises(ValidationError):
            product.price = 0

        assert product.quantity == 5
        assert product.price == Decimal('9.99')

    @pytest.mark.parametrize('price', ['0.001', Decimal('9.999'), 19.995])
    def test_price_with_sub_cent_precision_is_rejected(self, price: object) -> None:
        with pytest.raises(ValidationError, match='more than 2 decimal places'):
            _product(price=price)

    def test_trailing_zeros_do_not_count_as_precision(self) -> None:
        assert _product(price='9.990').price == Decimal('9.99')

    def test_price_beyond_column_range_is_rejected(self) -> None:
        assert _product(price='99999999.99').price == Decimal('99999999.99')

        with pytest.raises(ValidationError, match='Price cannot exceed'):
            _product(price='100000000')

    def test_quantity_beyond_integer_column_is_rejected(self) -> None:
        assert _product(quantity=2**31 - 1).quantity == 2**31 - 1

        with pytest.raises(ValidationError, match='Quantity cannot exceed'):
            _product(quantity=2**31)
