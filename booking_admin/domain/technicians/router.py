"""Technician router - FastAPI endpoints for the technician directory"""

import logging

from fastapi import APIRouter, Depends

from ...auth import AdminContext, require_admin
from ...models import Technician
from ...store import DocumentStore, get_store
from .schemas import TechnicianCreate, TechnicianStatusResponse
from .service import TechnicianService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/technicians", tags=["Technicians"])


def get_technician_service(store: DocumentStore = Depends(get_store)) -> TechnicianService:
    """Dependency injection for TechnicianService"""
    return TechnicianService(store)


@router.get("", response_model=list[Technician])
async def get_technicians(
    _: AdminContext = Depends(require_admin),
    service: TechnicianService = Depends(get_technician_service),
):
    """All technicians"""
    return await service.get_technicians()


@router.get("/active", response_model=list[Technician])
async def get_active_technicians(
    _: AdminContext = Depends(require_admin),
    service: TechnicianService = Depends(get_technician_service),
):
    """Technicians eligible for assignment"""
    return await service.get_active_technicians()


@router.get("/{technician_id}", response_model=Technician)
async def get_technician(
    technician_id: str,
    _: AdminContext = Depends(require_admin),
    service: TechnicianService = Depends(get_technician_service),
):
    return await service.get_technician(technician_id)


@router.post("", response_model=Technician, status_code=201)
async def create_technician(
    data: TechnicianCreate,
    _: AdminContext = Depends(require_admin),
    service: TechnicianService = Depends(get_technician_service),
):
    """Add a technician (always created active)"""
    return await service.create_technician(data)


@router.post("/{technician_id}/toggle-active", response_model=TechnicianStatusResponse)
async def toggle_active(
    technician_id: str,
    _: AdminContext = Depends(require_admin),
    service: TechnicianService = Depends(get_technician_service),
):
    technician, message = await service.toggle_active(technician_id)
    return TechnicianStatusResponse(
        id=technician.id, active=technician.active, verified=technician.verified, message=message
    )


@router.post("/{technician_id}/toggle-verified", response_model=TechnicianStatusResponse)
async def toggle_verified(
    technician_id: str,
    _: AdminContext = Depends(require_admin),
    service: TechnicianService = Depends(get_technician_service),
):
    technician, message = await service.toggle_verified(technician_id)
    return TechnicianStatusResponse(
        id=technician.id, active=technician.active, verified=technician.verified, message=message
    )
