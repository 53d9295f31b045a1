"""
Delete every user and create a fresh admin
Usage: python reset_admin.py [email] [password]
"""
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions

from booking_admin.errors import StoreError
from booking_admin.firebase import get_firestore_client, init_firebase
from booking_admin.models import USERS
from booking_admin.shared.validators import validate_admin_credentials
from booking_admin.store import DocumentStore
from create_admin import create_admin, parse_args, print_credentials

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def delete_auth_users() -> int:
    """Delete every Firebase Auth user, page by page"""
    deleted = 0
    for user in firebase_auth.list_users().iterate_all():
        try:
            firebase_auth.delete_user(user.uid)
        except firebase_exceptions.FirebaseError as e:
            logger.error(f"  ✗ Failed to delete user {user.uid}: {e}")
            continue
        logger.info(f"  ✓ Deleted user: {user.email or user.uid}")
        deleted += 1
    return deleted


async def delete_user_documents() -> int:
    store = DocumentStore(get_firestore_client())
    deleted = 0
    for doc in await store.list_documents(USERS):
        try:
            await store.delete_document(USERS, doc["id"])
        except StoreError as e:
            logger.error(f"  ✗ Failed to delete document {doc['id']}: {e}")
            continue
        logger.info(f"  ✓ Deleted Firestore document: {doc['id']}")
        deleted += 1
    return deleted


async def reset_admin(email: str, password: str) -> str:
    logger.info("🗑️  Deleting all user documents from Firestore...\n")
    count = await delete_user_documents()
    logger.info(f"\n✅ Deleted {count} document(s) from Firestore\n")

    logger.info("🚀 Creating new admin user...\n")
    return await create_admin(email, password)


if __name__ == "__main__":
    args = parse_args("Delete all users and create a new admin")
    error = validate_admin_credentials(args.email, args.password)
    if error:
        logger.error(f"❌ {error}")
        sys.exit(1)

    try:
        init_firebase()
        logger.info("🗑️  Deleting all existing users...\n")
        count = delete_auth_users()
        logger.info(f"\n✅ Deleted {count} user(s) from Firebase Authentication\n")

        uid = asyncio.run(reset_admin(args.email, args.password))
    except (firebase_exceptions.FirebaseError, StoreError, ValueError) as e:
        logger.error(f"❌ Error resetting admin: {e}")
        sys.exit(1)

    logger.info("✅ Admin reset completed successfully!\n")
    print_credentials(args.email, args.password, uid)
