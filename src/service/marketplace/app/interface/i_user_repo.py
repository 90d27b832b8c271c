from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.marketplace.domain.entity.user_entity import UserEntity


class IUserRepo(ABC):
    """Identity repository contract; every method may raise StorageError"""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def list_all(self) -> List[UserEntity]:
        """Ascending id order"""
        pass

    @abstractmethod
    async def create(self, user_entity: UserEntity) -> UserEntity:
        """Insert a transient user and return it with its storage-assigned id"""
        pass

    @abstractmethod
    async def update(self, user_entity: UserEntity) -> bool:
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        pass
