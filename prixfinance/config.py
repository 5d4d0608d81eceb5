# prixfinance/config.py
import os
import logging
from dotenv import load_dotenv

load_dotenv()

FIREBASE_CREDENTIAL_PATH = os.getenv("FIREBASE_CREDENTIAL_PATH", "./serviceAccountKey.json")
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")

ACTIVITY_LOG_ENABLED = os.getenv("ACTIVITY_LOG_ENABLED", "true").strip().lower() not in ("false", "0", "no")

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Firestore collections
USERS_COLLECTION = "users"
SETTINGS_COLLECTION = "userSettings"
BUDGETS_COLLECTION = "budgets"
TRANSACTIONS_COLLECTION = "transactions"
GOALS_COLLECTION = "goals"
TROPHIES_COLLECTION = "trophies"
USER_TROPHIES_COLLECTION = "usersTrophies"
ACTIVITY_COLLECTION = "userActivityLog"


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
