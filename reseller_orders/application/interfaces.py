from abc import ABC, abstractmethod
from typing import Optional, List
from uuid import UUID

from reseller_orders.domain.models import Order, OrderRecord, OrderStatus, ProfitRow


class OrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: UUID) -> Optional[Order]:
        pass

    @abstractmethod
    async def get_record(self, order_id: UUID) -> Optional[OrderRecord]:
        pass

    @abstractmethod
    async def list_records(self, status_name: Optional[str] = None) -> List[OrderRecord]:
        """Orders newest first, optionally only those in the named status"""
        pass

    @abstractmethod
    async def list_profit_rows(self, status_name: str) -> List[ProfitRow]:
        pass

    @abstractmethod
    async def exists(self, order_id: UUID) -> bool:
        pass

    @abstractmethod
    async def add(self, order: Order) -> None:
        pass

    @abstractmethod
    async def update(self, order: Order) -> None:
        pass


class CatalogRepository(ABC):
    @abstractmethod
    async def get_status_by_name(self, name: str) -> Optional[OrderStatus]:
        pass

    @abstractmethod
    async def status_exists(self, status_id: UUID) -> bool:
        pass

    @abstractmethod
    async def status_name_exists(self, name: str) -> bool:
        pass

    @abstractmethod
    async def product_exists(self, product_id: UUID) -> bool:
        pass

    @abstractmethod
    async def service_exists(self, service_id: UUID) -> bool:
        pass

