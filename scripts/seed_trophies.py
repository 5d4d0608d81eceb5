# scripts/seed_trophies.py
"""
Seeds the default trophy catalog into Firestore. Safe to re-run: trophies
that already exist are left as they are.

    FIREBASE_CREDENTIAL_PATH=./serviceAccountKey.json python scripts/seed_trophies.py
"""
import os
import sys
import logging

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "prixfinance")))

from firebase_admin import firestore

from config import configure_logging
from database import init_firebase
from trophies import seed_default_trophies


def main():
    configure_logging()
    init_firebase()
    db = firestore.client()

    created = seed_default_trophies(db)
    if created:
        logging.info(f"Created {len(created)} trophies: {', '.join(created)}")
    else:
        logging.info("Trophy catalog already up to date.")


if __name__ == "__main__":
    main()
