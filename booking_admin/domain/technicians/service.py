"""Technician service - Business logic for the technician directory"""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException

from ...errors import StoreError
from ...models import Technician
from ...shared.messages import (
    TECHNICIAN_CREATE_FAILED,
    TECHNICIAN_NOT_FOUND,
    TECHNICIAN_STATUS_FAILED,
    TECHNICIAN_VERIFY_FAILED,
    TECHNICIANS_LOAD_FAILED,
)
from ...store import DocumentStore
from .repository import TechnicianRepository
from .schemas import TechnicianCreate

logger = logging.getLogger(__name__)


class TechnicianService:
    """Service layer for technician business logic"""

    def __init__(self, store: DocumentStore):
        self.store = store
        self.repo = TechnicianRepository()

    async def get_technicians(self) -> list[Technician]:
        try:
            return await self.repo.get_technicians(self.store)
        except StoreError as e:
            logger.error(f"❌ Error fetching technicians: {e}")
            raise HTTPException(status_code=503, detail=TECHNICIANS_LOAD_FAILED) from e

    async def get_active_technicians(self) -> list[Technician]:
        try:
            return await self.repo.get_active_technicians(self.store)
        except StoreError as e:
            logger.error(f"❌ Error fetching active technicians: {e}")
            raise HTTPException(status_code=503, detail=TECHNICIANS_LOAD_FAILED) from e

    async def get_technician(self, technician_id: str) -> Technician:
        try:
            technician = await self.repo.get_technician(self.store, technician_id)
        except StoreError as e:
            logger.error(f"❌ Error fetching technician {technician_id}: {e}")
            raise HTTPException(status_code=503, detail=TECHNICIANS_LOAD_FAILED) from e
        if technician is None:
            raise HTTPException(status_code=404, detail=TECHNICIAN_NOT_FOUND)
        return technician

    async def create_technician(self, data: TechnicianCreate) -> Technician:
        """New technicians always start active"""
        technician_data = {
            "name": data.name,
            "phone": data.phone,
            "skills": data.skills,
            "active": True,
            "verified": data.verified,
            "createdAt": datetime.now(timezone.utc),
        }
        try:
            technician_id = await self.repo.create_technician(self.store, **technician_data)
        except StoreError as e:
            logger.error(f"❌ Error creating technician: {e}")
            raise HTTPException(status_code=503, detail=TECHNICIAN_CREATE_FAILED) from e

        logger.info(f"✅ Technician added: {data.name} ({technician_id})")
        return Technician.from_document({**technician_data, "id": technician_id})

    async def toggle_active(self, technician_id: str) -> tuple[Technician, str]:
        technician = await self.get_technician(technician_id)
        active = not technician.active
        try:
            await self.repo.update_technician(self.store, technician_id, active=active)
        except StoreError as e:
            logger.error(f"❌ Error toggling technician status for {technician_id}: {e}")
            raise HTTPException(status_code=503, detail=TECHNICIAN_STATUS_FAILED) from e

        message = f"Technician {'activated' if active else 'deactivated'} successfully"
        return technician.model_copy(update={"active": active}), message

    async def toggle_verified(self, technician_id: str) -> tuple[Technician, str]:
        technician = await self.get_technician(technician_id)
        verified = not technician.verified
        try:
            await self.repo.update_technician(self.store, technician_id, verified=verified)
        except StoreError as e:
            logger.error(f"❌ Error toggling verified status for {technician_id}: {e}")
            raise HTTPException(status_code=503, detail=TECHNICIAN_VERIFY_FAILED) from e

        message = f"Technician {'verified' if verified else 'unverified'} successfully"
        return technician.model_copy(update={"verified": verified}), message
