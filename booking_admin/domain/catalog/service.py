"""Service catalogue - Business logic for bookable services"""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException

from ...errors import StoreError
from ...models import Service
from ...shared.messages import (
    SERVICE_CREATE_FAILED,
    SERVICE_NOT_FOUND,
    SERVICE_STATUS_FAILED,
    SERVICE_UPDATE_FAILED,
    SERVICES_LOAD_FAILED,
)
from ...store import DocumentStore
from .repository import ServiceRepository
from .schemas import ServiceForm

logger = logging.getLogger(__name__)


class CatalogService:
    """Service layer for the service catalogue"""

    def __init__(self, store: DocumentStore):
        self.store = store
        self.repo = ServiceRepository()

    async def get_services(self) -> list[Service]:
        try:
            return await self.repo.get_services(self.store)
        except StoreError as e:
            logger.error(f"❌ Error fetching services: {e}")
            raise HTTPException(status_code=503, detail=SERVICES_LOAD_FAILED) from e

    async def get_service(self, service_id: str) -> Service:
        try:
            service = await self.repo.get_service(self.store, service_id)
        except StoreError as e:
            logger.error(f"❌ Error fetching service {service_id}: {e}")
            raise HTTPException(status_code=503, detail=SERVICES_LOAD_FAILED) from e
        if service is None:
            raise HTTPException(status_code=404, detail=SERVICE_NOT_FOUND)
        return service

    async def create_service(self, data: ServiceForm) -> Service:
        service_data = {
            **data.to_document(),
            "isActive": True,
            "createdAt": datetime.now(timezone.utc),
        }
        try:
            service_id = await self.repo.create_service(self.store, **service_data)
        except StoreError as e:
            logger.error(f"❌ Error creating service: {e}")
            raise HTTPException(status_code=503, detail=SERVICE_CREATE_FAILED) from e

        logger.info(f"✅ Service added: {data.title} ({service_id})")
        return Service.from_document({**service_data, "id": service_id})

    async def update_service(self, service_id: str, data: ServiceForm) -> Service:
        service = await self.get_service(service_id)
        updates = data.to_document()
        try:
            await self.repo.update_service(self.store, service_id, **updates)
        except StoreError as e:
            logger.error(f"❌ Error updating service {service_id}: {e}")
            raise HTTPException(status_code=503, detail=SERVICE_UPDATE_FAILED) from e
        return service.model_copy(update=updates)

    async def toggle_status(self, service_id: str) -> tuple[Service, str]:
        service = await self.get_service(service_id)
        is_active = not service.isActive
        try:
            await self.repo.update_service(self.store, service_id, isActive=is_active)
        except StoreError as e:
            logger.error(f"❌ Error toggling service status for {service_id}: {e}")
            raise HTTPException(status_code=503, detail=SERVICE_STATUS_FAILED) from e

        message = f"Service {'enabled' if is_active else 'disabled'} successfully"
        return service.model_copy(update={"isActive": is_active}), message
