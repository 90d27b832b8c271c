"""
Identity use cases: registration, login and administrative user management
"""

from typing import Any, List, Optional

from pydantic import SecretStr

from src.platform.exception.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.app.interface.i_password_hasher import IPasswordHasher
from src.service.marketplace.app.interface.i_user_repo import IUserRepo
from src.service.marketplace.domain.entity.user_entity import UserEntity, UserRole
from src.service.marketplace.domain.validators import StringValidators


UPDATABLE_FIELDS = frozenset({'username', 'password', 'email', 'role'})
INVALID_CREDENTIALS = 'Invalid credentials'


class IdentityUseCase:
    def __init__(self, *, user_repo: IUserRepo, password_hasher: IPasswordHasher) -> None:
        self.user_repo = user_repo
        self.password_hasher = password_hasher
        self._dummy_hash: Optional[str] = None

    def _get_dummy_hash(self) -> str:
        # Verified against when the username is unknown so both login failures cost one bcrypt check
        if self._dummy_hash is None:
            self._dummy_hash = self.password_hasher.hash_password(
                plain_password=SecretStr('dummy-password-for-timing')
            )
        return self._dummy_hash

    @Logger.io
    async def register(
        self, *, username: str, password: str, email: str, role: Any = UserRole.BUYER
    ) -> UserEntity:
        UserEntity.validate_password(password)
        user_entity = UserEntity(username=username, email=email, role=role)

        if await self.user_repo.get_by_username(username) is not None:
            raise ConflictError(f'Username already exists: {username}')

        user_entity.password_hash = self.password_hasher.hash_password(
            plain_password=SecretStr(password)
        )
        created = await self.user_repo.create(user_entity)

        metrics.record_registration(role=created.role.value)
        Logger.base.info(f'👤 [REGISTER] User {created.id} registered as {created.role.value}')
        return created

    @Logger.io
    async def login(self, *, username: str, password: str) -> UserEntity:
        StringValidators.validate_required_string(username, 'Username')
        StringValidators.validate_required_string(password, 'Password')

        user_entity = await self.user_repo.get_by_username(username)
        if user_entity is None:
            self.password_hasher.verify_password(
                plain_password=SecretStr(password), hashed_password=self._get_dummy_hash()
            )
            metrics.record_login(success=False)
            raise AuthError(INVALID_CREDENTIALS)

        if not self.password_hasher.verify_password(
            plain_password=SecretStr(password), hashed_password=user_entity.password_hash
        ):
            metrics.record_login(success=False)
            raise AuthError(INVALID_CREDENTIALS)

        metrics.record_login(success=True)
        return user_entity

    @Logger.io
    async def get_user(self, user_id: int) -> UserEntity:
        user_entity = await self.user_repo.get_by_id(user_id)
        if user_entity is None:
            raise NotFoundError(f'User not found: {user_id}')
        return user_entity

    @Logger.io
    async def update_field(self, *, user_id: int, field_name: str, new_value: Any) -> bool:
        """
        Change one attribute of a stored user.

        The value goes through the same rule registration applies; passwords are
        re-hashed and roles stored normalized.
        """
        if field_name not in UPDATABLE_FIELDS:
            raise ValidationError(
                f'Invalid field: {field_name}. Must be one of: {", ".join(sorted(UPDATABLE_FIELDS))}'
            )

        user_entity = await self.get_user(user_id)

        if field_name == 'password':
            UserEntity.validate_password(new_value)
            user_entity.password_hash = self.password_hasher.hash_password(
                plain_password=SecretStr(new_value)
            )
        elif field_name == 'username':
            StringValidators.validate_required_string(new_value, 'Username')
            existing = await self.user_repo.get_by_username(new_value)
            if existing is not None and existing.id != user_entity.id:
                raise ConflictError(f'Username already exists: {new_value}')
            user_entity.username = new_value
        elif field_name == 'email':
            user_entity.email = new_value
        else:
            user_entity.role = UserRole.from_value(new_value)

        updated = await self.user_repo.update(user_entity)
        if not updated:
            raise NotFoundError(f'User not found: {user_id}')
        return updated

    @Logger.io
    async def list_users(self) -> List[UserEntity]:
        return await self.user_repo.list_all()

    @Logger.io
    async def delete_user(self, user_id: int) -> bool:
        await self.get_user(user_id)

        deleted = await self.user_repo.delete(user_id)
        if not deleted:
            raise NotFoundError(f'User not found: {user_id}')

        Logger.base.info(f'🗑️ [DELETE_USER] User {user_id} removed')
        return deleted
