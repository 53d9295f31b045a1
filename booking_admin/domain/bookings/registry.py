"""Open booking pages, one assignment workflow per (admin, booking)"""

import logging
from collections import OrderedDict
from typing import Optional

from .assignment import AssignmentWorkflow

logger = logging.getLogger(__name__)

MAX_OPEN_PAGES = 500


class WorkflowRegistry:
    """
    Holds the page-scoped workflows between requests.

    Opening a booking page again replaces (and closes) the previous
    workflow for that admin; the oldest pages are closed past MAX_OPEN_PAGES.
    """

    def __init__(self, max_open: int = MAX_OPEN_PAGES):
        self.max_open = max_open
        self._workflows: "OrderedDict[tuple[str, str], AssignmentWorkflow]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._workflows)

    def open(self, admin_uid: str, booking_id: str, workflow: AssignmentWorkflow) -> AssignmentWorkflow:
        key = (admin_uid, booking_id)
        previous = self._workflows.pop(key, None)
        if previous is not None:
            previous.close()
        self._workflows[key] = workflow

        while len(self._workflows) > self.max_open:
            _, evicted = self._workflows.popitem(last=False)
            evicted.close()
            logger.debug(f"🧹 Closed booking page {evicted.booking.id} (registry full)")
        return workflow

    def get(self, admin_uid: str, booking_id: str) -> Optional[AssignmentWorkflow]:
        key = (admin_uid, booking_id)
        workflow = self._workflows.get(key)
        if workflow is not None:
            self._workflows.move_to_end(key)
        return workflow

    def close(self, admin_uid: str, booking_id: str) -> bool:
        workflow = self._workflows.pop((admin_uid, booking_id), None)
        if workflow is None:
            return False
        workflow.close()
        return True

    def close_all(self) -> None:
        for workflow in self._workflows.values():
            workflow.close()
        self._workflows.clear()
