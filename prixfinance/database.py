# prixfinance/database.py
import os
import logging
import firebase_admin
from firebase_admin import credentials, firestore
from fastapi import HTTPException, status

from config import FIREBASE_CREDENTIAL_PATH, FIREBASE_PROJECT_ID


def init_firebase():
    """
    Returns the default Firebase app, initializing it on first use.

    Uses the service account file when present, otherwise falls back to
    Application Default Credentials (Cloud Run, emulator, gcloud login).
    """
    try:
        # Already initialized (uvicorn reload, second import)
        return firebase_admin.get_app()
    except ValueError:
        pass

    if os.path.exists(FIREBASE_CREDENTIAL_PATH):
        cred = credentials.Certificate(FIREBASE_CREDENTIAL_PATH)
    else:
        cred = credentials.ApplicationDefault()

    options = {"projectId": FIREBASE_PROJECT_ID} if FIREBASE_PROJECT_ID else None
    return firebase_admin.initialize_app(cred, options)


def get_db():
    """FastAPI dependency yielding the Firestore client."""
    try:
        init_firebase()
        return firestore.client()
    except Exception as e:
        logging.error(f"Database connection error: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database unavailable")
