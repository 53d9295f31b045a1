"""Tests for name lookups, messages and shared validators."""

from booking_admin.models import Booking, Service, Technician
from booking_admin.shared.lookups import (
    UNASSIGNED,
    UNKNOWN_SERVICE,
    UNKNOWN_TECHNICIAN,
    join_bookings,
    resolve_service_name,
    resolve_technician_name,
    service_name_map,
    technician_name_map,
)
from booking_admin.shared.messages import (
    ASSIGNMENT_FAILED,
    ASSIGNMENT_MESSAGES,
    SIGN_IN_FAILED,
    assignment_message,
    sign_in_message,
)
from booking_admin.shared.validators import split_skills, validate_admin_credentials

SERVICES = [Service.from_document({"id": "s1", "title": "Electrician"})]
TECHNICIANS = [Technician.from_document({"id": "t1", "name": "Rajesh Kumar"})]


class TestNameResolution:
    def test_known_service(self):
        assert resolve_service_name(service_name_map(SERVICES), "s1") == "Electrician"

    def test_missing_service_uses_sentinel(self):
        assert resolve_service_name(service_name_map(SERVICES), "gone") == UNKNOWN_SERVICE
        assert resolve_service_name(service_name_map(SERVICES), None) == UNKNOWN_SERVICE

    def test_technician_names(self):
        names = technician_name_map(TECHNICIANS)
        assert resolve_technician_name(names, "t1") == "Rajesh Kumar"
        assert resolve_technician_name(names, None) == UNASSIGNED
        assert resolve_technician_name(names, "t9") == UNKNOWN_TECHNICIAN


class TestJoinBookings:
    def test_orphan_service_reference_does_not_fail(self):
        bookings = [Booking.from_document({"id": "b1", "serviceId": "gone"})]
        rows = join_bookings(bookings, service_name_map(SERVICES))
        assert rows[0]["serviceName"] == UNKNOWN_SERVICE
        assert "technicianName" not in rows[0]

    def test_technician_names_when_map_given(self):
        bookings = [
            Booking.from_document({"id": "b1", "serviceId": "s1", "technicianId": "t1"}),
            Booking.from_document({"id": "b2", "serviceId": "s1"}),
        ]
        rows = join_bookings(bookings, service_name_map(SERVICES), technician_name_map(TECHNICIANS))
        assert [row["technicianName"] for row in rows] == ["Rajesh Kumar", UNASSIGNED]
        assert rows[0]["serviceName"] == "Electrician"


class TestMessages:
    def test_mapped_assignment_codes(self):
        assert assignment_message("permission-denied") == ASSIGNMENT_MESSAGES["permission-denied"]
        assert assignment_message("unavailable", "backend down") == ASSIGNMENT_MESSAGES["unavailable"]

    def test_unmapped_assignment_fault_shows_detail(self):
        assert assignment_message("aborted", "contention") == "Error: contention"

    def test_assignment_fallback(self):
        assert assignment_message(None, "") == ASSIGNMENT_FAILED

    def test_sign_in_messages(self):
        assert "No account" in sign_in_message("auth/user-not-found")
        assert sign_in_message("auth/internal-error", "boom") == "boom"
        assert sign_in_message("auth/internal-error") == SIGN_IN_FAILED


class TestValidators:
    def test_admin_credentials(self):
        assert validate_admin_credentials("admin@admin.com", "Admin@123456") is None
        assert "email" in validate_admin_credentials("not-an-email", "Admin@123456")
        assert "6 characters" in validate_admin_credentials("admin@admin.com", "abc")

    def test_split_skills(self):
        assert split_skills(" Plumber, ,Electrician ") == ["Plumber", "Electrician"]
        assert split_skills(["AC Repair ", ""]) == ["AC Repair"]
        assert split_skills(None) == []
