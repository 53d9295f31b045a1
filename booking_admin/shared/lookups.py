"""
Client-side joins between bookings and the small reference collections.

Services and technicians are fetched in full, turned into id -> name maps,
and substituted into each booking row. Unresolved ids fall back to a
sentinel instead of failing the page.
"""

from typing import Iterable, Optional

from ..models import Booking, Service, Technician

UNKNOWN_SERVICE = "Unknown Service"
UNKNOWN_TECHNICIAN = "Unknown Technician"
UNASSIGNED = "Unassigned"


def service_name_map(services: Iterable[Service]) -> dict[str, str]:
    return {service.id: service.title for service in services}


def technician_name_map(technicians: Iterable[Technician]) -> dict[str, str]:
    return {technician.id: technician.name for technician in technicians}


def resolve_service_name(names: dict[str, str], service_id: Optional[str]) -> str:
    return names.get(service_id or "") or UNKNOWN_SERVICE


def resolve_technician_name(names: dict[str, str], technician_id: Optional[str]) -> str:
    if not technician_id:
        return UNASSIGNED
    return names.get(technician_id) or UNKNOWN_TECHNICIAN


def join_bookings(
    bookings: Iterable[Booking],
    services: dict[str, str],
    technicians: Optional[dict[str, str]] = None,
) -> list[dict]:
    """Booking rows with serviceName (and technicianName when a map is given)"""
    rows = []
    for booking in bookings:
        row = booking.model_dump()
        row["serviceName"] = resolve_service_name(services, booking.serviceId)
        if technicians is not None:
            row["technicianName"] = resolve_technician_name(technicians, booking.technicianId)
        rows.append(row)
    return rows
