"""SQLAlchemy Product Repository Implementation"""

from typing import List, Optional
from sqlmodel import select
from src.app.repositories.product_repository import ProductRepository
from src.domain.product import Product
from .base import SqlAlchemyRepository


class SqlAlchemyProductRepository(SqlAlchemyRepository, ProductRepository):

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        statement = select(Product).where(Product.id == product_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_ids(self, product_ids: List[int]) -> List[Product]:
        if not product_ids:
            return []
        statement = select(Product).where(Product.id.in_(product_ids))
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create(self, product: Product) -> Product:
        self.session.add(product)
        await self.session.flush()
        await self.session.refresh(product)
        return product
