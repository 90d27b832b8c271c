from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, Response, status

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.catalog_use_case import CatalogUseCase
from src.service.marketplace.app.query.list_products_with_sellers_use_case import (
    ListProductsWithSellersUseCase,
)
from src.service.marketplace.domain.entity.product_entity import Product
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.driving_adapter.http_controller.auth.basic_auth import (
    get_current_user,
)
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import require_seller
from src.service.marketplace.driving_adapter.http_controller.schema.product_schema import (
    ProductCreateRequest,
    ProductQuantityUpdateRequest,
    ProductResponse,
    ProductUpdateRequest,
    ProductWithSellerResponse,
)


router = APIRouter()


@router.post('', response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def create_product(
    request: ProductCreateRequest,
    current_user: UserEntity = Depends(require_seller),
    catalog_use_case: CatalogUseCase = Depends(Provide[Container.catalog_use_case]),
) -> ProductResponse:
    product = await catalog_use_case.create_product(
        name=request.name,
        description=request.description,
        price=request.price,
        quantity=request.quantity,
        acting_user=current_user,
    )
    return ProductResponse.from_entity(product)


@router.get('', response_model=List[ProductResponse])
@Logger.io
@inject
async def list_products(
    catalog_use_case: CatalogUseCase = Depends(Provide[Container.catalog_use_case]),
) -> List[ProductResponse]:
    products = await catalog_use_case.list_all_products()
    return [ProductResponse.from_entity(product) for product in products]


@router.get('/mine', response_model=List[ProductResponse])
@Logger.io
@inject
async def list_my_products(
    current_user: UserEntity = Depends(get_current_user),
    catalog_use_case: CatalogUseCase = Depends(Provide[Container.catalog_use_case]),
) -> List[ProductResponse]:
    products = await catalog_use_case.list_seller_products(current_user)
    return [ProductResponse.from_entity(product) for product in products]


@router.get('/search', response_model=List[ProductResponse])
@Logger.io
@inject
async def search_products(
    keyword: str = Query(''),
    catalog_use_case: CatalogUseCase = Depends(Provide[Container.catalog_use_case]),
) -> List[ProductResponse]:
    products = await catalog_use_case.search_products(keyword)
    return [ProductResponse.from_entity(product) for product in products]


@router.get('/overview', response_model=List[ProductWithSellerResponse])
@Logger.io
@inject
async def list_products_with_sellers(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListProductsWithSellersUseCase = Depends(
        Provide[Container.list_products_with_sellers_use_case]
    ),
) -> List[ProductWithSellerResponse]:
    rows = await use_case.execute(acting_user=current_user)
    return [ProductWithSellerResponse.from_dto(row) for row in rows]


@router.get('/{product_id}', response_model=ProductResponse)
@Logger.io
@inject
async def get_product(
    product_id: int,
    catalog_use_case: CatalogUseCase = Depends(Provide[Container.catalog_use_case]),
) -> ProductResponse:
    return ProductResponse.from_entity(await catalog_use_case.get_product(product_id))


@router.put('/{product_id}', response_model=ProductResponse)
@Logger.io
@inject
async def update_product(
    product_id: int,
    request: ProductUpdateRequest,
    current_user: UserEntity = Depends(get_current_user),
    catalog_use_case: CatalogUseCase = Depends(Provide[Container.catalog_use_case]),
) -> ProductResponse:
    updated_product = Product(
        name=request.name,
        description=request.description,
        price=request.price,
        quantity=request.quantity,
        seller_id=request.seller_id if request.seller_id is not None else current_user.id or 0,
        id=product_id,
    )
    await catalog_use_case.update_product(
        updated_product=updated_product, acting_user=current_user
    )
    return ProductResponse.from_entity(await catalog_use_case.get_product(product_id))


@router.patch('/{product_id}/quantity', response_model=ProductResponse)
@Logger.io
@inject
async def update_product_quantity(
    product_id: int,
    request: ProductQuantityUpdateRequest,
    current_user: UserEntity = Depends(get_current_user),
    catalog_use_case: CatalogUseCase = Depends(Provide[Container.catalog_use_case]),
) -> ProductResponse:
    await catalog_use_case.update_product_quantity(
        product_id=product_id, quantity=request.quantity, acting_user=current_user
    )
    return ProductResponse.from_entity(await catalog_use_case.get_product(product_id))


@router.delete('/{product_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
@inject
async def delete_product(
    product_id: int,
    current_user: UserEntity = Depends(get_current_user),
    catalog_use_case: CatalogUseCase = Depends(Provide[Container.catalog_use_case]),
) -> Response:
    await catalog_use_case.delete_product(product_id=product_id, acting_user=current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
