"""
Catalog use cases

Only sellers create products, and only the seller recorded on the stored
product may change or delete it. Ownership is always decided against the
stored record, never against what the caller sends.
"""

from typing import Any, List

from src.platform.exception.exceptions import AuthzError, NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.app.interface.i_product_repo import IProductRepo
from src.service.marketplace.domain.entity.product_entity import Product
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.domain.role_policy import can_create_product
from src.service.marketplace.domain.validators import NumericValidators, StringValidators


class CatalogUseCase:
    def __init__(self, *, product_repo: IProductRepo) -> None:
        self.product_repo = product_repo

    async def _get_owned_product(
        self, *, product_id: int, acting_user: UserEntity, operation: str
    ) -> Product:
        stored = await self.get_product(product_id)
        if stored.seller_id != acting_user.id:
            metrics.record_catalog_mutation(operation=operation, result='forbidden')
            raise AuthzError('Only the owning seller can modify this product')
        return stored

    @Logger.io
    async def create_product(
        self,
        *,
        name: str,
        description: str,
        price: Any,
        quantity: int,
        acting_user: UserEntity,
    ) -> Product:
        if not can_create_product(acting_user):
            metrics.record_catalog_mutation(operation='create', result='forbidden')
            raise AuthzError('Only sellers can create products')
        if acting_user.id is None:
            raise ValidationError('Seller must be a registered user')

        product = Product.create(
            name=name,
            description=description,
            price=price,
            quantity=quantity,
            seller_id=acting_user.id,
        )
        created = await self.product_repo.create(product)

        metrics.record_catalog_mutation(operation='create', result='success')
        Logger.base.info(f'📦 [CREATE_PRODUCT] Product {created.id} by seller {created.seller_id}')
        return created

    @Logger.io
    async def get_product(self, product_id: int) -> Product:
        product = await self.product_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f'Product not found: {product_id}')
        return product

    @Logger.io
    async def update_product(self, *, updated_product: Product, acting_user: UserEntity) -> bool:
        """
        Write name, description, price and quantity of `updated_product`.

        `updated_product.seller_id` is ignored; the stored id and seller_id are kept.
        """
        if updated_product.id is None:
            raise ValidationError('Product id is required')

        stored = await self._get_owned_product(
            product_id=updated_product.id, acting_user=acting_user, operation='update'
        )

        product = Product(
            name=updated_product.name,
            description=updated_product.description,
            price=updated_product.price,
            quantity=updated_product.quantity,
            seller_id=stored.seller_id,
            id=stored.id,
        )
        updated = await self.product_repo.update(product)
        if not updated:
            raise NotFoundError(f'Product not found: {stored.id}')

        metrics.record_catalog_mutation(operation='update', result='success')
        return updated

    @Logger.io
    async def update_product_quantity(
        self, *, product_id: int, quantity: int, acting_user: UserEntity
    ) -> bool:
        NumericValidators.validate_quantity(quantity)

        product = await self._get_owned_product(
            product_id=product_id, acting_user=acting_user, operation='update_quantity'
        )
        product.quantity = quantity

        updated = await self.product_repo.update(product)
        if not updated:
            raise NotFoundError(f'Product not found: {product_id}')

        metrics.record_catalog_mutation(operation='update_quantity', result='success')
        return updated

    @Logger.io
    async def delete_product(self, *, product_id: int, acting_user: UserEntity) -> bool:
        await self._get_owned_product(
            product_id=product_id, acting_user=acting_user, operation='delete'
        )

        deleted = await self.product_repo.delete(product_id)
        if not deleted:
            raise NotFoundError(f'Product not found: {product_id}')

        metrics.record_catalog_mutation(operation='delete', result='success')
        Logger.base.info(f'🗑️ [DELETE_PRODUCT] Product {product_id} removed')
        return deleted

    @Logger.io
    async def list_all_products(self) -> List[Product]:
        return await self.product_repo.list_all()

    @Logger.io
    async def list_seller_products(self, seller: UserEntity) -> List[Product]:
        if seller.id is None:
            raise ValidationError('Seller must be a registered user')
        return await self.product_repo.list_by_seller(seller.id)

    @Logger.io
    async def search_products(self, keyword: str) -> List[Product]:
        StringValidators.validate_required_string(keyword, 'Search keyword')
        return await self.product_repo.search(keyword.strip())
