"""
Typed entities for the documents the dashboard reads.

Raw Firestore payloads are loosely typed (missing fields, legacy names such
as services.name, numbers stored as strings). Each entity converts a payload
exactly once through from_document(); the defaulting rules live in the
model validators below and nowhere else.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, computed_field, model_validator

# Collection names
USERS = "users"
SERVICES = "services"
TECHNICIANS = "technicians"
BOOKINGS = "bookings"


class BookingStatus(str, Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Position on the pending → assigned → on the way → completed timeline
TIMELINE_STEPS = {
    BookingStatus.PENDING.value: 0,
    BookingStatus.ASSIGNED.value: 1,
    BookingStatus.COMPLETED.value: 3,
    BookingStatus.CANCELLED.value: -1,
}
TIMELINE_LABELS = ["Pending", "Assigned", "On the way", "Completed"]


def _text(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _flag(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _number(value: Any) -> float:
    # bool is an int subclass; a stored True is not a price
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return 0


def _timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


class Booking(BaseModel):
    id: str
    serviceId: str = ""
    technicianId: Optional[str] = None
    # Unknown statuses are kept verbatim so a page never fails to render
    status: str = BookingStatus.PENDING.value
    customerName: str = ""
    customerPhone: str = ""
    customerAddress: str = ""
    createdAt: Optional[datetime] = None
    scheduledAt: Optional[datetime] = None
    notes: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            "id": data.get("id", ""),
            "serviceId": _text(data.get("serviceId")),
            "technicianId": _text(data.get("technicianId")) or None,
            "status": _text(data.get("status")) or BookingStatus.PENDING.value,
            "customerName": _text(data.get("customerName")),
            "customerPhone": _text(data.get("customerPhone")),
            "customerAddress": _text(data.get("customerAddress")),
            "createdAt": _timestamp(data.get("createdAt")),
            "scheduledAt": _timestamp(data.get("scheduledAt")),
            "notes": _text(data.get("notes")) or None,
        }

    @classmethod
    def from_document(cls, doc: dict) -> "Booking":
        return cls.model_validate(doc)

    @property
    def has_technician(self) -> bool:
        return bool(self.technicianId)

    @computed_field
    @property
    def timelineStep(self) -> int:
        return TIMELINE_STEPS.get(self.status, 0)

    def violates_assignment_invariant(self) -> bool:
        """technicianId is set iff status is assigned or completed; nothing enforces it"""
        bound = self.status in (BookingStatus.ASSIGNED.value, BookingStatus.COMPLETED.value)
        return self.has_technician != bound


class Technician(BaseModel):
    id: str
    name: str = ""
    phone: str = ""
    skills: list[str] = []
    active: bool = True
    verified: bool = False

    @model_validator(mode="before")
    @classmethod
    def apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        skills = data.get("skills")
        return {
            "id": data.get("id", ""),
            "name": _text(data.get("name")),
            "phone": _text(data.get("phone")),
            "skills": [s for s in skills if isinstance(s, str)] if isinstance(skills, list) else [],
            "active": _flag(data.get("active"), True),
            "verified": _flag(data.get("verified"), False),
        }

    @classmethod
    def from_document(cls, doc: dict) -> "Technician":
        return cls.model_validate(doc)

    @property
    def skills_text(self) -> str:
        return ", ".join(self.skills)


class Service(BaseModel):
    id: str
    title: str = ""
    category: str = ""
    price: float = 0
    duration: int = 0
    isActive: bool = True

    @model_validator(mode="before")
    @classmethod
    def apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        # Older documents (and the demo seed) use "name" instead of "title"
        title = _text(data.get("title")) or _text(data.get("name"))
        return {
            "id": data.get("id", ""),
            "title": title,
            "category": _text(data.get("category")),
            "price": _number(data.get("price")),
            "duration": int(_number(data.get("duration"))),
            "isActive": _flag(data.get("isActive"), True),
        }

    @classmethod
    def from_document(cls, doc: dict) -> "Service":
        return cls.model_validate(doc)


class UserProfile(BaseModel):
    uid: str
    role: str = ""
    email: str = ""
    createdAt: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            "uid": data.get("uid") or data.get("id", ""),
            "role": _text(data.get("role")),
            "email": _text(data.get("email")),
            "createdAt": _timestamp(data.get("createdAt")),
        }

    @classmethod
    def from_document(cls, doc: dict) -> "UserProfile":
        return cls.model_validate(doc)
