"""User-facing strings for every fault the dashboard surfaces"""

from typing import Optional

ACCESS_DENIED = "Access denied. Admin privileges required."
MISSING_CREDENTIALS = "Please enter both email and password"
SIGN_IN_FAILED = "Failed to sign in. Please try again."

SIGN_IN_MESSAGES = {
    "auth/user-not-found": "No account found with this email address.",
    "auth/wrong-password": "Incorrect password. Please try again.",
    "auth/invalid-credential": "Incorrect email or password. Please try again.",
    "auth/invalid-email": "Invalid email address.",
    "auth/user-disabled": "This account has been disabled.",
    "auth/too-many-requests": "Too many failed attempts. Please try again later.",
}

ASSIGNMENT_FAILED = "Failed to assign technician. Please try again."
ASSIGNMENT_MESSAGES = {
    "permission-denied": "Permission denied. Please check your access rights.",
    "unavailable": "Service temporarily unavailable. Please try again later.",
}

# Read faults: inline error state with a retry hint, no automatic retry
BOOKING_NOT_FOUND = "Booking not found"
BOOKING_LOAD_FAILED = "Failed to load booking details. Please try again."
BOOKINGS_LOAD_FAILED = "Unable to load bookings. Please try again later."
STATS_LOAD_FAILED = "Unable to load dashboard statistics. Please try again later."
RECENT_BOOKINGS_LOAD_FAILED = "Unable to load recent bookings. Please try again later."
SERVICES_LOAD_FAILED = "Unable to load services. Please try again later."
TECHNICIANS_LOAD_FAILED = "Unable to load technicians. Please try again later."
TECHNICIAN_NOT_FOUND = "Technician not found"
SERVICE_NOT_FOUND = "Service not found"

# Catalogue and directory writes
SERVICE_CREATE_FAILED = "Failed to create service. Please try again."
SERVICE_UPDATE_FAILED = "Failed to update service. Please try again."
SERVICE_STATUS_FAILED = "Failed to update service status"
TECHNICIAN_CREATE_FAILED = "Failed to create technician. Please try again."
TECHNICIAN_STATUS_FAILED = "Failed to update technician status"
TECHNICIAN_VERIFY_FAILED = "Failed to update verification status"


def sign_in_message(code: Optional[str], detail: Optional[str] = None) -> str:
    """Map an identity fault to a message; unmapped faults keep their own text"""
    if code in SIGN_IN_MESSAGES:
        return SIGN_IN_MESSAGES[code]
    return detail or SIGN_IN_FAILED


def assignment_message(code: Optional[str], detail: Optional[str] = None) -> str:
    """Map a failed assignment write to a message"""
    if code in ASSIGNMENT_MESSAGES:
        return ASSIGNMENT_MESSAGES[code]
    if detail:
        return f"Error: {detail}"
    return ASSIGNMENT_FAILED


def assigned_message(technician_name: str) -> str:
    return f"Technician {technician_name} assigned successfully."
