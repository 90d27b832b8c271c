from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.service.marketplace.app.dto.product_with_seller import ProductWithSeller
from src.service.marketplace.domain.entity.product_entity import Product


class ProductCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {'name': 'Widget', 'description': 'A widget', 'price': 9.99, 'quantity': 5}
        }
    )

    name: str
    description: str
    price: Decimal
    quantity: int


class ProductUpdateRequest(BaseModel):
    """seller_id is accepted for compatibility but ownership comes from the stored product"""

    name: str
    description: str
    price: Decimal
    quantity: int
    seller_id: Optional[int] = None


class ProductQuantityUpdateRequest(BaseModel):
    quantity: int


class ProductResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': 1,
                'name': 'Widget',
                'description': 'A widget',
                'price': '9.99',
                'quantity': 5,
                'seller_id': 1,
            }
        }
    )

    id: int
    name: str
    description: str
    price: Decimal
    quantity: int
    seller_id: int

    @classmethod
    def from_entity(cls, product: Product) -> 'ProductResponse':
        return cls(
            id=product.id or 0,
            name=product.name,
            description=product.description,
            price=product.price,
            quantity=product.quantity,
            seller_id=product.seller_id,
        )


class ProductWithSellerResponse(ProductResponse):
    seller_username: Optional[str] = None

    @classmethod
    def from_dto(cls, row: ProductWithSeller) -> 'ProductWithSellerResponse':
        return cls(
            **ProductResponse.from_entity(row.product).model_dump(),
            seller_username=row.seller_username,
        )
