"""SQLAlchemy Customer Repository Implementation"""

from typing import Optional
from sqlmodel import select
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.customer import Customer
from .base import SqlAlchemyRepository


class SqlAlchemyCustomerRepository(SqlAlchemyRepository, CustomerRepository):

    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        statement = select(Customer).where(Customer.id == customer_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def create(self, customer: Customer) -> Customer:
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer
