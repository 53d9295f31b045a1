"""Catalog router - FastAPI endpoints for bookable services"""

from fastapi import APIRouter, Depends

from ...auth import AdminContext, require_admin
from ...models import Service
from ...store import DocumentStore, get_store
from .schemas import ServiceForm, ServiceStatusResponse
from .service import CatalogService

router = APIRouter(prefix="/services", tags=["Services"])


def get_catalog_service(store: DocumentStore = Depends(get_store)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(store)


@router.get("", response_model=list[Service])
async def get_services(
    _: AdminContext = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.get_services()


@router.post("", response_model=Service, status_code=201)
async def create_service(
    data: ServiceForm,
    _: AdminContext = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    """Add a service (created enabled)"""
    return await service.create_service(data)


@router.patch("/{service_id}", response_model=Service)
async def update_service(
    service_id: str,
    data: ServiceForm,
    _: AdminContext = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return await service.update_service(service_id, data)


@router.post("/{service_id}/toggle", response_model=ServiceStatusResponse)
async def toggle_service(
    service_id: str,
    _: AdminContext = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    """Enable or disable a service"""
    updated, message = await service.toggle_status(service_id)
    return ServiceStatusResponse(id=updated.id, isActive=updated.isActive, message=message)
