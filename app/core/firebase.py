import firebase_admin
from firebase_admin import credentials, initialize_app, firestore
from .config import settings

_db = None

def get_db():
    """Firestore client, initialized on first use from FIREBASE_CREDS_PATH"""
    global _db
    if _db is None:
        try:
            firebase_admin.get_app()
        except ValueError:
            cred = credentials.Certificate(str(settings.FIREBASE_CREDS_PATH_ABSOLUTE))
            initialize_app(cred)
        _db = firestore.client()
    return _db
