from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status

from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthzError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.identity_use_case import IdentityUseCase
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.driving_adapter.http_controller.auth.basic_auth import (
    get_current_user,
)
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.marketplace.driving_adapter.http_controller.schema.user_schema import (
    CreateUserRequest,
    LoginRequest,
    UpdateUserFieldRequest,
    UserResponse,
)


# === API Router ===

router = APIRouter()


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def create_user(
    request: CreateUserRequest,
    identity_use_case: IdentityUseCase = Depends(Provide[Container.identity_use_case]),
) -> UserResponse:
    user_entity = await identity_use_case.register(
        username=request.username,
        password=request.password.get_secret_value(),
        email=request.email,
        role=request.role,
    )
    return UserResponse.from_entity(user_entity)


@router.post('/login', response_model=UserResponse)
@Logger.io
@inject
async def login(
    request: LoginRequest,
    identity_use_case: IdentityUseCase = Depends(Provide[Container.identity_use_case]),
) -> UserResponse:
    user_entity = await identity_use_case.login(
        username=request.username, password=request.password.get_secret_value()
    )
    return UserResponse.from_entity(user_entity)


@router.get('/me', response_model=UserResponse)
@Logger.io
async def get_me(current_user: UserEntity = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_entity(current_user)


@router.patch('/me', response_model=UserResponse)
@Logger.io
@inject
async def update_me(
    request: UpdateUserFieldRequest,
    current_user: UserEntity = Depends(get_current_user),
    identity_use_case: IdentityUseCase = Depends(Provide[Container.identity_use_case]),
) -> UserResponse:
    # Role changes are an admin operation
    if request.field_name == 'role':
        raise AuthzError('Only admins can change roles')

    await identity_use_case.update_field(
        user_id=current_user.id, field_name=request.field_name, new_value=request.new_value
    )
    return UserResponse.from_entity(await identity_use_case.get_user(current_user.id))


@router.get('', response_model=List[UserResponse])
@Logger.io
@inject
async def list_users(
    _admin: UserEntity = Depends(require_admin),
    identity_use_case: IdentityUseCase = Depends(Provide[Container.identity_use_case]),
) -> List[UserResponse]:
    return [UserResponse.from_entity(user) for user in await identity_use_case.list_users()]


@router.get('/{user_id}', response_model=UserResponse)
@Logger.io
@inject
async def get_user(
    user_id: int,
    _admin: UserEntity = Depends(require_admin),
    identity_use_case: IdentityUseCase = Depends(Provide[Container.identity_use_case]),
) -> UserResponse:
    return UserResponse.from_entity(await identity_use_case.get_user(user_id))


@router.patch('/{user_id}', response_model=UserResponse)
@Logger.io
@inject
async def update_user(
    user_id: int,
    request: UpdateUserFieldRequest,
    _admin: UserEntity = Depends(require_admin),
    identity_use_case: IdentityUseCase = Depends(Provide[Container.identity_use_case]),
) -> UserResponse:
    await identity_use_case.update_field(
        user_id=user_id, field_name=request.field_name, new_value=request.new_value
    )
    return UserResponse.from_entity(await identity_use_case.get_user(user_id))


@router.delete('/{user_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
@inject
async def delete_user(
    user_id: int,
    _admin: UserEntity = Depends(require_admin),
    identity_use_case: IdentityUseCase = Depends(Provide[Container.identity_use_case]),
) -> Response:
    await identity_use_case.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
