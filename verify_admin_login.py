"""
Check that an account can sign in and would be admitted to the dashboard
Usage: python verify_admin_login.py [email] [password]
"""
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from booking_admin.auth import SessionGuard
from booking_admin.errors import AuthError
from booking_admin.firebase import get_firestore_client
from booking_admin.identity import IdentityProvider
from booking_admin.shared.messages import sign_in_message
from booking_admin.store import DocumentStore
from create_admin import parse_args

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


async def verify_admin_login(email: str, password: str) -> bool:
    identity = IdentityProvider()

    logger.info("📝 Step 1: Testing Firebase Authentication...")
    try:
        session = await identity.sign_in(email, password)
    except AuthError as e:
        logger.error(f"  ❌ Authentication failed: {sign_in_message(e.code, e.message)}")
        return False
    logger.info("  ✅ Authentication successful!")
    logger.info(f"     UID: {session.uid}")
    logger.info(f"     Email: {session.email}\n")

    logger.info("📝 Step 2: Checking admin role on the user document...")
    guard = SessionGuard(DocumentStore(get_firestore_client()))
    admitted = await guard.check(session)
    if admitted:
        logger.info("  ✅ Role is admin - the dashboard will admit this account\n")
    else:
        logger.error("  ❌ Access would be denied: users/{uid} is missing or its role is not 'admin'\n")

    await identity.sign_out()
    return admitted


if __name__ == "__main__":
    args = parse_args("Verify an admin account end to end")
    logger.info("🧪 Testing Admin Login...\n")
    logger.info(f"Email: {args.email}")
    logger.info(f"Password: {'*' * len(args.password)}\n")

    if not asyncio.run(verify_admin_login(args.email, args.password)):
        sys.exit(1)
    logger.info("✅ All checks passed!")
