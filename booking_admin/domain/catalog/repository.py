"""Service catalogue repository - Document store operations for services"""

from typing import Optional

from ...models import SERVICES, Service
from ...store import DocumentStore


class ServiceRepository:
    """Repository for service document operations"""

    @staticmethod
    async def get_services(store: DocumentStore) -> list[Service]:
        docs = await store.list_documents(SERVICES)
        return [Service.from_document(doc) for doc in docs]

    @staticmethod
    async def get_service(store: DocumentStore, service_id: str) -> Optional[Service]:
        doc = await store.get_document(SERVICES, service_id)
        return Service.from_document(doc) if doc else None

    @staticmethod
    async def create_service(store: DocumentStore, **service_data) -> str:
        return await store.create_document(SERVICES, service_data)

    @staticmethod
    async def update_service(store: DocumentStore, service_id: str, **updates) -> None:
        await store.update_fields(SERVICES, service_id, updates)

    @staticmethod
    async def count_services(store: DocumentStore) -> int:
        return await store.count_documents(SERVICES)
