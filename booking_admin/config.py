import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Firebase Configuration
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")
# Web API key, only needed for email/password sign-in through the Identity Toolkit
FIREBASE_WEB_API_KEY = os.getenv("FIREBASE_WEB_API_KEY")
FIREBASE_CREDENTIALS_PATH = os.getenv("FIREBASE_CREDENTIALS_PATH", "serviceAccountKey.json")
# Point at the auth emulator with e.g. http://localhost:9099/identitytoolkit.googleapis.com/v1
IDENTITY_TOOLKIT_URL = os.getenv(
    "IDENTITY_TOOLKIT_URL", "https://identitytoolkit.googleapis.com/v1"
)
IDENTITY_TIMEOUT_SECONDS = float(os.getenv("IDENTITY_TIMEOUT_SECONDS", "10"))

# Role stored on users/{uid} that grants dashboard access
ADMIN_ROLE = "admin"

# Assignment result messages are cleared after these delays
SUCCESS_MESSAGE_TTL_SECONDS = float(os.getenv("SUCCESS_MESSAGE_TTL_SECONDS", "3"))
ERROR_MESSAGE_TTL_SECONDS = float(os.getenv("ERROR_MESSAGE_TTL_SECONDS", "5"))

# Listing limits
BOOKINGS_PAGE_SIZE = int(os.getenv("BOOKINGS_PAGE_SIZE", "20"))
RECENT_BOOKINGS_LIMIT = int(os.getenv("RECENT_BOOKINGS_LIMIT", "6"))

# Login throttling (per client IP)
LOGIN_RATE_LIMIT = int(os.getenv("LOGIN_RATE_LIMIT", "10"))
LOGIN_RATE_WINDOW_SECONDS = int(os.getenv("LOGIN_RATE_WINDOW_SECONDS", "300"))

# Frontend base URL for CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", FRONTEND_URL).split(",")
    if origin.strip()
]

# Bootstrap script defaults - change the password after first login
DEFAULT_ADMIN_EMAIL = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@admin.com")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "Admin@123456")
