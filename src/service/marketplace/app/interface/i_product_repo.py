from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.marketplace.domain.entity.product_entity import Product


class IProductRepo(ABC):
    """Catalog repository contract; every method may raise StorageError"""

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Product]:
        """Ascending id order"""
        pass

    @abstractmethod
    async def list_by_seller(self, seller_id: int) -> List[Product]:
        pass

    @abstractmethod
    async def search(self, keyword: str) -> List[Product]:
        """Case-insensitive substring match on name OR description, ascending id"""
        pass

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """Insert a transient product and return it with its storage-assigned id"""
        pass

    @abstractmethod
    async def update(self, product: Product) -> bool:
        """Persist name/description/price/quantity; id and seller_id are never written"""
        pass

    @abstractmethod
    async def delete(self, product_id: int) -> bool:
        pass
