"""
Technician assignment workflow for one open booking page.

Flow:
    select(technician_id)      stage a choice, nothing is written
    request_confirmation()     open the confirmation gate for the staged choice
    dismiss()                  close the gate, keep the staged choice
    confirm()                  optimistic update, write, then commit or roll back

The attempt itself is a small state machine:

    idle -> pending -> committed
                    -> rolled_back -> pending (retry)

begin(), commit() and rollback() are the pure state steps; confirm() wraps
them around the store calls. While an attempt is pending every further
request is ignored, so at most one write is issued per booking page.

Usage:
    workflow = AssignmentWorkflow(store, booking, technicians)
    workflow.select("tech-1")
    workflow.request_confirmation()
    await workflow.confirm()
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...config import ERROR_MESSAGE_TTL_SECONDS, SUCCESS_MESSAGE_TTL_SECONDS
from ...errors import StoreError
from ...models import Booking, BookingStatus, Service, Technician
from ...shared.messages import assigned_message, assignment_message
from ...store import DocumentStore
from ..technicians.repository import TechnicianRepository
from .repository import BookingRepository

logger = logging.getLogger(__name__)


class AssignmentState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


TRANSITIONS: dict[AssignmentState, set[AssignmentState]] = {
    AssignmentState.IDLE: {AssignmentState.PENDING},
    AssignmentState.PENDING: {AssignmentState.COMMITTED, AssignmentState.ROLLED_BACK},
    AssignmentState.COMMITTED: {AssignmentState.PENDING},
    AssignmentState.ROLLED_BACK: {AssignmentState.PENDING},
}


class InvalidTransitionError(Exception):
    """Raised when an assignment step is not valid from the current state."""


@dataclass
class AssignmentMessage:
    kind: str  # "success" or "error"
    text: str


@dataclass
class AssignmentAttempt:
    """What an attempt changed, kept so a failed write can be undone"""

    technician_id: str
    technician_name: str
    previous_technician_id: Optional[str]
    previous_status: str


class AssignmentWorkflow:
    """Page-scoped state of the booking detail screen's assignment panel"""

    def __init__(
        self,
        store: DocumentStore,
        booking: Booking,
        technicians: list[Technician],
        service: Optional[Service] = None,
        technician: Optional[Technician] = None,
        success_ttl: float = SUCCESS_MESSAGE_TTL_SECONDS,
        error_ttl: float = ERROR_MESSAGE_TTL_SECONDS,
    ):
        self.store = store
        self.booking = booking
        # Only active technicians are offered; fit is judged by the operator
        self.technicians = [t for t in technicians if t.active]
        self.service = service
        self.technician = technician
        self.success_ttl = success_ttl
        self.error_ttl = error_ttl

        self.state = AssignmentState.IDLE
        self.selected_technician_id = ""
        self.confirmation_open = False
        self.message: Optional[AssignmentMessage] = None
        self._message_timer: Optional[asyncio.TimerHandle] = None
        self._alive = True

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def assigning(self) -> bool:
        return self.state == AssignmentState.PENDING

    @property
    def closed(self) -> bool:
        return not self._alive

    def find_technician(self, technician_id: str) -> Optional[Technician]:
        for technician in self.technicians:
            if technician.id == technician_id:
                return technician
        return None

    def preconditions_met(self) -> bool:
        return (
            self._alive
            and bool(self.selected_technician_id)
            and not self.booking.has_technician
            and not self.assigning
        )

    @property
    def can_assign(self) -> bool:
        """Whether the assign action is reachable at all on this page"""
        return self._alive and not self.booking.has_technician and bool(self.technicians)

    # ------------------------------------------------------------------
    # Staging and the confirmation gate
    # ------------------------------------------------------------------

    def select(self, technician_id: str) -> bool:
        """Stage a technician; an empty id clears the selection"""
        # The confirmed name must be the one written: no changes behind an open prompt
        if not self._alive or self.assigning or self.confirmation_open:
            return False
        if technician_id and self.find_technician(technician_id) is None:
            logger.warning(
                f"⚠️ Ignoring selection of {technician_id}: not an active technician "
                f"for booking {self.booking.id}"
            )
            return False
        self.selected_technician_id = technician_id or ""
        return True

    def request_confirmation(self) -> Optional[str]:
        """Open the gate; returns the prompt, or None when nothing may be assigned"""
        if not self.preconditions_met():
            return None
        self.confirmation_open = True
        return self.confirmation_prompt

    @property
    def confirmation_prompt(self) -> Optional[str]:
        if not self.confirmation_open:
            return None
        technician = self.find_technician(self.selected_technician_id)
        name = technician.name if technician else ""
        return (
            f"Are you sure you want to assign {name} to this booking? "
            'The booking status will be updated to "Assigned".'
        )

    def dismiss(self) -> None:
        """Abort the confirmation; the staged selection is kept"""
        if self.assigning:
            return
        self.confirmation_open = False

    # ------------------------------------------------------------------
    # State steps
    # ------------------------------------------------------------------

    def _transition(self, new_state: AssignmentState) -> None:
        if new_state not in TRANSITIONS[self.state]:
            raise InvalidTransitionError(
                f"Cannot move assignment from {self.state.value} to {new_state.value}"
            )
        logger.debug(f"Booking {self.booking.id} assignment: {self.state.value} → {new_state.value}")
        self.state = new_state

    def begin(self) -> AssignmentAttempt:
        """Enter pending and apply the optimistic update"""
        self._transition(AssignmentState.PENDING)
        self._clear_message()
        self.confirmation_open = False

        technician = self.find_technician(self.selected_technician_id)
        attempt = AssignmentAttempt(
            technician_id=self.selected_technician_id,
            technician_name=technician.name if technician else "",
            previous_technician_id=self.booking.technicianId,
            previous_status=self.booking.status,
        )
        self.booking = self.booking.model_copy(
            update={
                "technicianId": attempt.technician_id,
                "status": BookingStatus.ASSIGNED.value,
            }
        )
        return attempt

    def commit(self, attempt: AssignmentAttempt, technician: Optional[Technician]) -> None:
        """The write landed: show the technician and report success"""
        self._transition(AssignmentState.COMMITTED)
        self.technician = technician
        self.selected_technician_id = ""
        name = attempt.technician_name or (technician.name if technician else "")
        self._show_message("success", assigned_message(name), self.success_ttl)
        logger.info(f"✅ Booking {self.booking.id} assigned to {attempt.technician_id}")

    def rollback(self, attempt: AssignmentAttempt, error: Exception) -> None:
        """The write failed: restore the pre-attempt booking and report why"""
        self._transition(AssignmentState.ROLLED_BACK)
        self.booking = self.booking.model_copy(
            update={
                "technicianId": attempt.previous_technician_id,
                "status": attempt.previous_status,
            }
        )
        self.technician = None
        if isinstance(error, StoreError):
            text = assignment_message(error.code, error.message)
        else:
            text = assignment_message(None, str(error))
        self._show_message("error", text, self.error_ttl)
        logger.warning(f"↩️ Rolled back assignment of booking {self.booking.id}: {error}")

    # ------------------------------------------------------------------
    # The confirmed assignment
    # ------------------------------------------------------------------

    async def confirm(self) -> bool:
        """Run the confirmed assignment; returns True when the write landed"""
        if not self.confirmation_open or not self.preconditions_met():
            return False

        attempt = self.begin()
        try:
            await BookingRepository.assign_technician(
                self.store, self.booking.id, attempt.technician_id
            )
        except Exception as e:
            logger.error(f"❌ Error assigning technician to booking {self.booking.id}: {e}")
            if self._alive:
                self.rollback(attempt, e)
            return False

        # The assignment is durable from here on; a failed detail read must
        # not undo it on screen
        technician = None
        try:
            technician = await TechnicianRepository.get_technician(self.store, attempt.technician_id)
        except StoreError as e:
            logger.warning(f"⚠️ Assigned technician {attempt.technician_id} could not be loaded: {e}")

        if self._alive:
            self.commit(attempt, technician)
        else:
            logger.info(f"Booking {self.booking.id} page closed before the assignment finished")
        return True

    # ------------------------------------------------------------------
    # Messages and teardown
    # ------------------------------------------------------------------

    def _show_message(self, kind: str, text: str, ttl: float) -> None:
        self._clear_message()
        message = AssignmentMessage(kind=kind, text=text)
        self.message = message
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Outside an event loop the message stays until the next attempt
            return
        self._message_timer = loop.call_later(ttl, self._expire_message, message)

    def _expire_message(self, message: AssignmentMessage) -> None:
        if self.message is message:
            self.message = None
        self._message_timer = None

    def _clear_message(self) -> None:
        if self._message_timer is not None:
            self._message_timer.cancel()
            self._message_timer = None
        self.message = None

    def close(self) -> None:
        """Tear the page down; late results are no longer applied"""
        self._alive = False
        self.confirmation_open = False
        if self._message_timer is not None:
            self._message_timer.cancel()
            self._message_timer = None

    def view(self) -> dict:
        """Snapshot of everything the booking page renders"""
        return {
            "booking": self.booking.model_dump(),
            "service": self.service.model_dump() if self.service else None,
            "technician": self.technician.model_dump() if self.technician else None,
            "technicians": [
                {"id": t.id, "name": t.name, "skills": t.skills, "skillsText": t.skills_text}
                for t in self.technicians
            ],
            "selectedTechnicianId": self.selected_technician_id,
            "confirmation": {
                "open": self.confirmation_open,
                "prompt": self.confirmation_prompt,
            },
            "state": self.state.value,
            "assigning": self.assigning,
            "canAssign": self.can_assign,
            "message": (
                {"type": self.message.kind, "text": self.message.text} if self.message else None
            ),
        }
