"""
In-memory repositories for use case unit tests

Stored records are copied on the way in and out so a use case can only change
state through create/update/delete, like it would against a database.
"""

from typing import List, Optional
from unittest.mock import Mock

import attrs
import pytest

from src.service.marketplace.app.catalog_use_case import CatalogUseCase
from src.service.marketplace.app.identity_use_case import IdentityUseCase
from src.service.marketplace.app.interface.i_product_repo import IProductRepo
from src.service.marketplace.app.interface.i_user_repo import IUserRepo
from src.service.marketplace.domain.entity.product_entity import Product
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)


class InMemoryUserRepo(IUserRepo):
    def __init__(self) -> None:
        self.users: dict[int, UserEntity] = {}
        self._next_id = 1

    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        user = self.users.get(user_id)
        return attrs.evolve(user) if user else None

    async def get_by_username(self, username: str) -> Optional[UserEntity]:
        for user in self.users.values():
            if user.username == username:
                return attrs.evolve(user)
        return None

    async def list_all(self) -> List[UserEntity]:
        return [attrs.evolve(self.users[user_id]) for user_id in sorted(self.users)]

    async def create(self, user_entity: UserEntity) -> UserEntity:
        stored = attrs.evolve(user_entity, id=self._next_id)
        self.users[stored.id] = stored  # type: ignore[index]
        self._next_id += 1
        return attrs.evolve(stored)

    async def update(self, user_entity: UserEntity) -> bool:
        if user_entity.id not in self.users:
            return False
        self.users[user_entity.id] = attrs.evolve(user_entity)
        return True

    async def delete(self, user_id: int) -> bool:
        return self.users.pop(user_id, None) is not None


class InMemoryProductRepo(IProductRepo):
    def __init__(self) -> None:
        self.products: dict[int, Product] = {}
        self._next_id = 1

    def _sorted(self) -> List[Product]:
        return [attrs.evolve(self.products[product_id]) for product_id in sorted(self.products)]

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        product = self.products.get(product_id)
        return attrs.evolve(product) if product else None

    async def list_all(self) -> List[Product]:
        return self._sorted()

    async def list_by_seller(self, seller_id: int) -> List[Product]:
        return [product for product in self._sorted() if product.seller_id == seller_id]

    async def search(self, keyword: str) -> List[Product]:
        needle = keyword.lower()
        return [
            product
            for product in self._sorted()
            if needle in product.name.lower() or needle in product.description.lower()
        ]

    async def create(self, product: Product) -> Product:
        stored = attrs.evolve(product, id=self._next_id)
        self.products[stored.id] = stored  # type: ignore[index]
        self._next_id += 1
        return attrs.evolve(stored)

    async def update(self, product: Product) -> bool:
        stored = self.products.get(product.id)  # type: ignore[arg-type]
        if stored is None:
            return False
        self.products[stored.id] = attrs.evolve(  # type: ignore[index]
            product, id=stored.id, seller_id=stored.seller_id
        )
        return True

    async def delete(self, product_id: int) -> bool:
        return self.products.pop(product_id, None) is not None


@pytest.fixture
def user_repo() -> InMemoryUserRepo:
    return InMemoryUserRepo()


@pytest.fixture
def product_repo() -> InMemoryProductRepo:
    return InMemoryProductRepo()


@pytest.fixture
def password_hasher() -> Mock:
    """Real bcrypt (4 rounds) behind a Mock so calls can be asserted"""
    return Mock(wraps=BcryptPasswordHasher(rounds=4))


@pytest.fixture
def identity_use_case(user_repo: InMemoryUserRepo, password_hasher: Mock) -> IdentityUseCase:
    return IdentityUseCase(user_repo=user_repo, password_hasher=password_hasher)


@pytest.fixture
def catalog_use_case(product_repo: InMemoryProductRepo) -> CatalogUseCase:
    return CatalogUseCase(product_repo=product_repo)
