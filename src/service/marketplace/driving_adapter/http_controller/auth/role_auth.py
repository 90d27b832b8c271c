from fastapi import Depends
from opentelemetry import trace

from src.platform.exception.exceptions import AuthzError
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.domain.role_policy import can_create_product, can_manage_users
from src.service.marketplace.driving_adapter.http_controller.auth.basic_auth import (
    get_current_user,
)


async def require_seller(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_seller',
        attributes={
            'user.id': current_user.id or 0,
            'user.role': current_user.role.value,
        },
    ):
        if not can_create_product(current_user):
            raise AuthzError('Only sellers can perform this action')
        return current_user


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={
            'user.id': current_user.id or 0,
            'user.role': current_user.role.value,
        },
    ):
        if not can_manage_users(current_user):
            raise AuthzError('Only admins can perform this action')
        return current_user
