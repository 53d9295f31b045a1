"""Booking router - FastAPI endpoints for bookings and technician assignment"""

import logging

from fastapi import APIRouter, Depends, Request

from ...auth import AdminContext, require_admin
from ...store import DocumentStore, get_store
from .assignment import AssignmentWorkflow
from .registry import WorkflowRegistry
from .schemas import BookingRow, TechnicianSelection
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_service(store: DocumentStore = Depends(get_store)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(store)


def get_registry(request: Request) -> WorkflowRegistry:
    return request.app.state.workflows


async def get_workflow(
    booking_id: str,
    admin: AdminContext = Depends(require_admin),
    registry: WorkflowRegistry = Depends(get_registry),
    service: BookingService = Depends(get_booking_service),
) -> AssignmentWorkflow:
    """The admin's open page for this booking, opened on first use"""
    workflow = registry.get(admin.uid, booking_id)
    if workflow is None:
        workflow = registry.open(admin.uid, booking_id, await service.open_booking(booking_id))
    return workflow


# ============================================================================
# LISTING
# ============================================================================


@router.get("", response_model=list[BookingRow])
async def list_bookings(
    _: AdminContext = Depends(require_admin),
    service: BookingService = Depends(get_booking_service),
):
    """Latest bookings (first page only) with service names resolved"""
    return await service.list_bookings()


# ============================================================================
# BOOKING DETAIL PAGE
# ============================================================================


@router.get("/{booking_id}")
async def open_booking(
    booking_id: str,
    admin: AdminContext = Depends(require_admin),
    registry: WorkflowRegistry = Depends(get_registry),
    service: BookingService = Depends(get_booking_service),
):
    """Open (or reload) the booking page; any previous page state is discarded"""
    workflow = await service.open_booking(booking_id)
    registry.open(admin.uid, booking_id, workflow)
    return workflow.view()


@router.delete("/{booking_id}/page")
async def close_booking(
    booking_id: str,
    admin: AdminContext = Depends(require_admin),
    registry: WorkflowRegistry = Depends(get_registry),
):
    """Navigate away from the booking page"""
    return {"closed": registry.close(admin.uid, booking_id)}


@router.get("/{booking_id}/assignment")
async def get_assignment(workflow: AssignmentWorkflow = Depends(get_workflow)):
    """Current state of the assignment panel"""
    return workflow.view()


@router.post("/{booking_id}/assignment/select")
async def select_technician(
    data: TechnicianSelection,
    workflow: AssignmentWorkflow = Depends(get_workflow),
):
    """Stage a technician; nothing is written"""
    workflow.select(data.technicianId)
    return workflow.view()


@router.post("/{booking_id}/assignment/confirmation")
async def request_confirmation(workflow: AssignmentWorkflow = Depends(get_workflow)):
    """Ask for confirmation of the staged technician"""
    workflow.request_confirmation()
    return workflow.view()


@router.delete("/{booking_id}/assignment/confirmation")
async def dismiss_confirmation(workflow: AssignmentWorkflow = Depends(get_workflow)):
    """Dismiss the confirmation; the staged technician is kept"""
    workflow.dismiss()
    return workflow.view()


@router.post("/{booking_id}/assignment/confirm")
async def confirm_assignment(workflow: AssignmentWorkflow = Depends(get_workflow)):
    """Assign the staged technician (optimistic, rolled back on failure)"""
    await workflow.confirm()
    return workflow.view()
