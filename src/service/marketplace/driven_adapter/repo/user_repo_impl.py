from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import delete as sql_delete, select, update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.storage_error_guard import storage_error_guard
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_user_repo import IUserRepo
from src.service.marketplace.domain.entity.user_entity import UserEntity, UserRole
from src.service.marketplace.driven_adapter.model.user_model import UserModel


class UserRepoImpl(IUserRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _to_entity(user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            username=user_model.username,
            password_hash=user_model.password_hash,
            email=user_model.email,
            role=UserRole(user_model.role),
        )

    @Logger.io
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        async with storage_error_guard('get user by id'), self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id == user_id))
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return self._to_entity(user_model)

    @Logger.io
    async def get_by_username(self, username: str) -> Optional[UserEntity]:
        async with storage_error_guard('get user by username'), self.session_factory() as session:
            result = await session.execute(
                select(UserModel).where(UserModel.username == username)
            )
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return self._to_entity(user_model)

    @Logger.io
    async def list_all(self) -> List[UserEntity]:
        async with storage_error_guard('list users'), self.session_factory() as session:
            result = await session.execute(select(UserModel).order_by(UserModel.id))
            return [self._to_entity(user_model) for user_model in result.scalars().all()]

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        async with storage_error_guard('create user'), self.session_factory() as session:
            user_model = UserModel(
                username=user_entity.username,
                password_hash=user_entity.password_hash,
                email=user_entity.email,
                role=user_entity.role.value,
            )

            session.add(user_model)
            await session.commit()
            await session.refresh(user_model)

            return self._to_entity(user_model)

    @Logger.io
    async def update(self, user_entity: UserEntity) -> bool:
        async with storage_error_guard('update user'), self.session_factory() as session:
            stmt = (
                sql_update(UserModel)
                .where(UserModel.id == user_entity.id)
                .values(
                    username=user_entity.username,
                    password_hash=user_entity.password_hash,
                    email=user_entity.email,
                    role=user_entity.role.value,
                )
                .returning(UserModel.id)
            )
            result = await session.execute(stmt)
            updated_id = result.scalar_one_or_none()
            await session.commit()

            return updated_id is not None

    @Logger.io
    async def delete(self, user_id: int) -> bool:
        async with storage_error_guard('delete user'), self.session_factory() as session:
            stmt = sql_delete(UserModel).where(UserModel.id == user_id).returning(UserModel.id)
            result = await session.execute(stmt)
            deleted_id = result.scalar_one_or_none()
            await session.commit()

            return deleted_id is not None
