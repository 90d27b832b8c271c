"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.service.marketplace.app.catalog_use_case import CatalogUseCase
from src.service.marketplace.app.identity_use_case import IdentityUseCase
from src.service.marketplace.app.query.list_products_with_sellers_use_case import (
    ListProductsWithSellersUseCase,
)
from src.service.marketplace.driven_adapter.repo.product_repo_impl import ProductRepoImpl
from src.service.marketplace.driven_adapter.repo.user_repo_impl import UserRepoImpl
from src.service.marketplace.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (engine is re-created per event loop by AsyncEngineManager)
    database = providers.Singleton(Database)

    # Security
    password_hasher = providers.Singleton(
        BcryptPasswordHasher, rounds=config_service.provided.BCRYPT_ROUNDS
    )

    # Repositories (stateless - use session_factory per call)
    user_repo = providers.Singleton(UserRepoImpl, session_factory=database.provided.session)
    product_repo = providers.Singleton(ProductRepoImpl, session_factory=database.provided.session)

    # Use cases
    identity_use_case = providers.Singleton(
        IdentityUseCase, user_repo=user_repo, password_hasher=password_hasher
    )
    catalog_use_case = providers.Singleton(CatalogUseCase, product_repo=product_repo)
    list_products_with_sellers_use_case = providers.Singleton(
        ListProductsWithSellersUseCase,
        catalog_use_case=catalog_use_case,
        identity_use_case=identity_use_case,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
