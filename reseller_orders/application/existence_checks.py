from uuid import UUID


class ExistenceChecks:
    """Membership checks used by request validation"""

    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def status_exists(self, status_id: UUID) -> bool:
        async with self._uow() as uow:
            return await uow.catalog.status_exists(status_id)

    async def status_name_exists(self, name: str) -> bool:
        async with self._uow() as uow:
            return await uow.catalog.status_name_exists(name)

    async def product_exists(self, product_id: UUID) -> bool:
        async with self._uow() as uow:
            return await uow.catalog.product_exists(product_id)

    async def service_exists(self, service_id: UUID) -> bool:
        async with self._uow() as uow:
            return await uow.catalog.service_exists(service_id)

    async def order_exists(self, order_id: UUID) -> bool:
        async with self._uow() as uow:
            return await uow.orders.exists(order_id)
