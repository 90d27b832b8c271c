from typing import List

from src.platform.exception.exceptions import AuthzError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.catalog_use_case import CatalogUseCase
from src.service.marketplace.app.dto.product_with_seller import ProductWithSeller
from src.service.marketplace.app.identity_use_case import IdentityUseCase
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.domain.role_policy import can_view_catalog_overview


class ListProductsWithSellersUseCase:
    def __init__(
        self, *, catalog_use_case: CatalogUseCase, identity_use_case: IdentityUseCase
    ) -> None:
        self.catalog_use_case = catalog_use_case
        self.identity_use_case = identity_use_case

    @Logger.io
    async def execute(self, *, acting_user: UserEntity) -> List[ProductWithSeller]:
        """Every product paired with its seller's username, ascending product id"""
        if not can_view_catalog_overview(acting_user):
            raise AuthzError('Only admins can view the catalog overview')

        products = await self.catalog_use_case.list_all_products()
        usernames = {user.id: user.username for user in await self.identity_use_case.list_users()}

        orphaned = sum(1 for product in products if product.seller_id not in usernames)
        if orphaned:
            Logger.base.warning(f'⚠️ [OVERVIEW] {orphaned} product(s) reference a deleted seller')

        return [
            ProductWithSeller(product=product, seller_username=usernames.get(product.seller_id))
            for product in products
        ]
