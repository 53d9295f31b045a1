"""Dashboard router - FastAPI endpoint for the overview page"""

from fastapi import APIRouter, Depends

from ...auth import AdminContext, require_admin
from ...store import DocumentStore, get_store
from .service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def get_dashboard_service(store: DocumentStore = Depends(get_store)) -> DashboardService:
    """Dependency injection for DashboardService"""
    return DashboardService(store)


@router.get("")
async def get_dashboard(
    admin: AdminContext = Depends(require_admin),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Overview statistics and the most recent bookings"""
    overview = await service.get_overview()
    overview["admin"] = {"uid": admin.uid, "email": admin.email}
    return overview
