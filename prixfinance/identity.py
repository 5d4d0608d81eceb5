# prixfinance/identity.py
from google.cloud.firestore import FieldFilter

from config import USERS_COLLECTION
from errors import NotFound, ValidationError
from resources import USERS, is_missing


def resolve_user_id(email: str, db) -> str:
    """
    Maps a user's email to the Firestore id of their `users` document.

    Email is the only handle callers have on a user; the id is returned to
    them but never accepted from them. Raises NotFound when no user has
    this email.
    """
    if is_missing(email):
        raise ValidationError("Missing required fields: email.")

    users_ref = (db.collection(USERS_COLLECTION)
                 .where(filter=FieldFilter("email", "==", email))
                 .limit(1))
    for doc in users_ref.stream():
        return doc.id

    raise NotFound(USERS.describe(USERS.not_found, {"email": email}))
