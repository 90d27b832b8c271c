"""Product repository implementation."""

from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import delete as sql_delete, func, or_, select, update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.storage_error_guard import storage_error_guard
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_product_repo import IProductRepo
from src.service.marketplace.domain.entity.product_entity import Product
from src.service.marketplace.driven_adapter.model.product_model import ProductModel


class ProductRepoImpl(IProductRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _to_entity(db_product: ProductModel) -> Product:
        """Convert database model to domain entity."""
        return Product(
            name=db_product.name,
            description=db_product.description,
            price=db_product.price,
            quantity=db_product.quantity,
            seller_id=db_product.seller_id,
            id=db_product.id,
        )

    async def _list(self, operation: str, *criteria) -> List[Product]:
        async with storage_error_guard(operation), self.session_factory() as session:
            result = await session.execute(
                select(ProductModel).where(*criteria).order_by(ProductModel.id)
            )
            return [ProductRepoImpl._to_entity(db_product) for db_product in result.scalars()]

    @Logger.io
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        async with storage_error_guard('get product by id'), self.session_factory() as session:
            result = await session.execute(
                select(ProductModel).where(ProductModel.id == product_id)
            )
            db_product = result.scalar_one_or_none()

            if not db_product:
                return None

            return ProductRepoImpl._to_entity(db_product)

    @Logger.io
    async def list_all(self) -> List[Product]:
        return await self._list('list products')

    @Logger.io
    async def list_by_seller(self, seller_id: int) -> List[Product]:
        return await self._list('list products by seller', ProductModel.seller_id == seller_id)

    @Logger.io
    async def search(self, keyword: str) -> List[Product]:
        pattern = keyword.lower()
        return await self._list(
            'search products',
            or_(
                func.lower(ProductModel.name).contains(pattern, autoescape=True),
                func.lower(ProductModel.description).contains(pattern, autoescape=True),
            ),
        )

    @Logger.io
    async def create(self, product: Product) -> Product:
        async with storage_error_guard('create product'), self.session_factory() as session:
            db_product = ProductModel(
                name=product.name,
                description=product.description,
                price=product.price,
                quantity=product.quantity,
                seller_id=product.seller_id,
            )
            session.add(db_product)
            await session.commit()
            await session.refresh(db_product)

            return ProductRepoImpl._to_entity(db_product)

    @Logger.io
    async def update(self, product: Product) -> bool:
        async with storage_error_guard('update product'), self.session_factory() as session:
            stmt = (
                sql_update(ProductModel)
                .where(ProductModel.id == product.id)
                .values(
                    name=product.name,
                    description=product.description,
                    price=product.price,
                    quantity=product.quantity,
                )
                .returning(ProductModel.id)
            )
            result = await session.execute(stmt)
            updated_id = result.scalar_one_or_none()
            await session.commit()

            return updated_id is not None

    @Logger.io
    async def delete(self, product_id: int) -> bool:
        async with storage_error_guard('delete product'), self.session_factory() as session:
            stmt = (
                sql_delete(ProductModel)
                .where(ProductModel.id == product_id)
                .returning(ProductModel.id)
            )
            result = await session.execute(stmt)
            deleted_id = result.scalar_one_or_none()
            await session.commit()

            return deleted_id is not None
