"""Product Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.product import Product


class ProductRepository(ABC):

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        pass

    @abstractmethod
    async def get_by_ids(self, product_ids: List[int]) -> List[Product]:
        """
        Retrieve all products whose ID is in product_ids

        Missing IDs are silently skipped; callers compare lengths.
        """
        pass

    @abstractmethod
    async def create(self, product: Product) -> Product:
        pass
