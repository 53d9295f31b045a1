"""Firebase Admin SDK initialisation shared by the API and the bootstrap scripts"""

import logging
from pathlib import Path

import firebase_admin
from firebase_admin import credentials, firestore_async

from .config import FIREBASE_CREDENTIALS_PATH, FIREBASE_PROJECT_ID

logger = logging.getLogger(__name__)


def init_firebase() -> firebase_admin.App:
    """Initialize Firebase Admin SDK (only once)"""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    options = {"projectId": FIREBASE_PROJECT_ID}
    key_path = Path(FIREBASE_CREDENTIALS_PATH)
    if key_path.exists():
        app = firebase_admin.initialize_app(credentials.Certificate(str(key_path)), options)
        logger.info(f"Firebase Admin initialized with service account {key_path.name}")
        return app

    try:
        # Uses Application Default Credentials (gcloud auth application-default login)
        app = firebase_admin.initialize_app(credentials.ApplicationDefault(), options)
        logger.info("Firebase Admin initialized with default credentials")
    except Exception as e:
        logger.warning(f"⚠️ Default credentials unavailable: {e}")
        # Initialize without credentials (limited functionality)
        app = firebase_admin.initialize_app(options=options)
        logger.info("Firebase Admin initialized with project ID only")
    return app


def get_firestore_client():
    """Async Firestore client bound to the default Firebase app"""
    return firestore_async.client(init_firebase())
