"""
HTTP Basic authentication

There are no sessions or tokens: every protected request carries the
credentials and is re-authenticated through IdentityUseCase.login.
"""

from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthError
from src.service.marketplace.app.identity_use_case import IdentityUseCase
from src.service.marketplace.domain.entity.user_entity import UserEntity


http_basic = HTTPBasic(auto_error=False)


@inject
async def get_current_user(
    credentials: Optional[HTTPBasicCredentials] = Depends(http_basic),
    identity_use_case: IdentityUseCase = Depends(Provide[Container.identity_use_case]),
) -> UserEntity:
    if credentials is None:
        raise AuthError('Authentication required')

    return await identity_use_case.login(
        username=credentials.username, password=credentials.password
    )
