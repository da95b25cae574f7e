"""
Firestore client setup with lazy initialization.
"""

import firebase_admin
from firebase_admin import credentials, firestore

from core.config import FIREBASE_PROJECT_ID, GOOGLE_APPLICATION_CREDENTIALS

_firestore_client: firestore.Client | None = None


def get_firestore_client() -> firestore.Client:
    """Get or create the Firestore client (lazy initialization)."""
    global _firestore_client
    if _firestore_client is None:
        try:
            app = firebase_admin.get_app()
        except ValueError:
            # Service account file when configured, else Application Default Credentials
            if GOOGLE_APPLICATION_CREDENTIALS:
                credential = credentials.Certificate(GOOGLE_APPLICATION_CREDENTIALS)
            else:
                credential = credentials.ApplicationDefault()
            app = firebase_admin.initialize_app(credential, {"projectId": FIREBASE_PROJECT_ID})
        _firestore_client = firestore.client(app)
    return _firestore_client
