"""Technician repository - Document store operations for technicians"""

from typing import Optional

from ...models import TECHNICIANS, Technician
from ...store import DocumentStore


class TechnicianRepository:
    """Repository for technician document operations"""

    @staticmethod
    async def get_technicians(store: DocumentStore) -> list[Technician]:
        docs = await store.list_documents(TECHNICIANS)
        return [Technician.from_document(doc) for doc in docs]

    @staticmethod
    async def get_active_technicians(store: DocumentStore) -> list[Technician]:
        """Equality filter only: no ranking, no skill matching"""
        docs = await store.list_documents(TECHNICIANS, filters=[("active", True)])
        return [Technician.from_document(doc) for doc in docs]

    @staticmethod
    async def get_technician(store: DocumentStore, technician_id: str) -> Optional[Technician]:
        doc = await store.get_document(TECHNICIANS, technician_id)
        return Technician.from_document(doc) if doc else None

    @staticmethod
    async def create_technician(store: DocumentStore, **technician_data) -> str:
        return await store.create_document(TECHNICIANS, technician_data)

    @staticmethod
    async def update_technician(store: DocumentStore, technician_id: str, **updates) -> None:
        await store.update_fields(TECHNICIANS, technician_id, updates)

    @staticmethod
    async def count_technicians(store: DocumentStore) -> int:
        return await store.count_documents(TECHNICIANS)
