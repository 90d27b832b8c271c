from typing import Optional

import attrs

from src.service.marketplace.domain.entity.product_entity import Product


@attrs.frozen
class ProductWithSeller:
    """Admin overview row; seller_username is None when the seller account no longer exists"""

    product: Product
    seller_username: Optional[str]
