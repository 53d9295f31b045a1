"""
Create an admin account for the dashboard
Usage: python create_admin.py [email] [password]
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions

from booking_admin.config import ADMIN_ROLE, DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_PASSWORD
from booking_admin.errors import StoreError
from booking_admin.firebase import get_firestore_client, init_firebase
from booking_admin.models import USERS
from booking_admin.shared.validators import validate_admin_credentials
from booking_admin.store import SERVER_TIMESTAMP, DocumentStore

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def parse_args(description: str) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("email", nargs="?", default=DEFAULT_ADMIN_EMAIL)
    parser.add_argument("password", nargs="?", default=DEFAULT_ADMIN_PASSWORD)
    return parser.parse_args()


async def write_admin_profile(uid: str, email: str) -> None:
    """users/{uid} with the admin role; the Admin SDK bypasses security rules"""
    store = DocumentStore(get_firestore_client())
    await store.set_document(
        USERS, uid, {"role": ADMIN_ROLE, "email": email, "createdAt": SERVER_TIMESTAMP}
    )


async def create_admin(email: str, password: str) -> str:
    """Create the Auth user and its admin profile; returns the uid"""
    init_firebase()
    logger.info(f"📝 Creating user with email: {email}")
    user = firebase_auth.create_user(email=email, password=password)
    logger.info(f"  ✓ User created successfully (UID: {user.uid})\n")

    logger.info("📝 Creating user document in Firestore...")
    try:
        await write_admin_profile(user.uid, email)
    except StoreError as e:
        # Without a profile the account can never sign in; remove it so a rerun starts clean
        logger.error(f"  ✗ Failed to write users/{user.uid}: {e}")
        try:
            firebase_auth.delete_user(user.uid)
            logger.info(f"  ✓ Removed Auth user {user.uid} created for this run")
        except firebase_exceptions.FirebaseError as cleanup_error:
            logger.error(
                f"  ✗ Auth user {user.uid} is left without a profile; delete it by hand: {cleanup_error}"
            )
        raise
    logger.info("  ✓ User document created with admin role\n")
    return user.uid


def print_credentials(email: str, password: str, uid: str) -> None:
    logger.info("📋 Login Credentials:")
    logger.info(f"   Email: {email}")
    logger.info(f"   Password: {password}")
    logger.info(f"   UID: {uid}")
    logger.info("\n⚠️  Please change the password after first login!")


if __name__ == "__main__":
    args = parse_args("Create an admin user")
    error = validate_admin_credentials(args.email, args.password)
    if error:
        logger.error(f"❌ {error}")
        sys.exit(1)

    logger.info("🚀 Creating admin user...\n")
    try:
        uid = asyncio.run(create_admin(args.email, args.password))
    except firebase_auth.EmailAlreadyExistsError:
        logger.error("❌ User with this email already exists.")
        logger.error("   To grant the role, set role: 'admin' on users/{uid} for that account,")
        logger.error("   or run reset_admin.py to start over.")
        sys.exit(1)
    except (firebase_exceptions.FirebaseError, StoreError, ValueError) as e:
        logger.error(f"❌ Error creating admin user: {e}")
        sys.exit(1)

    logger.info("✅ Admin user created successfully!\n")
    print_credentials(args.email, args.password, uid)
