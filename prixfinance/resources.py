# prixfinance/resources.py
"""
Declarative description of every stored resource.

Each ResourceConfig names the Firestore collection, the fields that make up
the natural (uniqueness) key, the fields a caller may write, how incoming
values are coerced and which defaults apply on create. The generic
Repository in repository.py is the only code that interprets them.
"""
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from config import (
    ACTIVITY_COLLECTION,
    BUDGETS_COLLECTION,
    GOALS_COLLECTION,
    SETTINGS_COLLECTION,
    TRANSACTIONS_COLLECTION,
    TROPHIES_COLLECTION,
    USER_TROPHIES_COLLECTION,
    USERS_COLLECTION,
)
from errors import ValidationError

Coercer = Callable[[str, Any], Any]

# Never writable through a request body
PROTECTED_FIELDS = frozenset({"id", "userId", "createdAt", "updatedAt"})


def is_missing(value: Any) -> bool:
    return value is None or value == ""


def to_number(field_name: str, value: Any):
    """Numeric coercion: "1000" -> 1000, "12.5" -> 12.5."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number.")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number.")
    return int(number) if number.is_integer() else number


def to_timestamp(field_name: str, value: Any) -> datetime:
    """Date coercion to an aware UTC datetime. Naive input is taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if text[-1:] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"{field_name} must be an ISO-8601 date (YYYY-MM-DD).")
    else:
        raise ValidationError(f"{field_name} must be an ISO-8601 date (YYYY-MM-DD).")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def display_value(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.timetz().replace(tzinfo=None) == time.min:
            return value.date().isoformat()
        return value.isoformat()
    return value


@dataclass(frozen=True)
class ResourceConfig:
    name: str
    collection: str
    key_fields: Tuple[str, ...]
    not_found: str = "No {name} found."
    conflict: str = "This {name} already exists."
    # None means any non-protected field is writable
    fields: Optional[Tuple[str, ...]] = None
    coercions: Dict[str, Coercer] = field(default_factory=dict)
    # value, or callable receiving the document being created
    defaults: Dict[str, Any] = field(default_factory=dict)
    created_fields: Tuple[str, ...] = ("createdAt", "updatedAt")
    # key field whose value is the Firestore document id (1:1 documents)
    document_key: Optional[str] = None
    # update() creates the document when it does not exist yet
    upsert: bool = False
    # False for append-only logs: create() skips the key conflict check
    unique: bool = True

    def describe(self, template: str, key: Dict[str, Any]) -> str:
        values = {name: display_value(value) for name, value in key.items()}
        values.setdefault("name", self.name)
        return template.format(**values)


USERS = ResourceConfig(
    name="user",
    collection=USERS_COLLECTION,
    key_fields=("email",),
    not_found="User with email '{email}' not found.",
    conflict="A user with that email already exists.",
)

USER_SETTINGS = ResourceConfig(
    name="settings",
    collection=SETTINGS_COLLECTION,
    key_fields=("userId",),
    not_found="No settings found for this user.",
    document_key="userId",
    upsert=True,
)

BUDGETS = ResourceConfig(
    name="budget",
    collection=BUDGETS_COLLECTION,
    key_fields=("userId", "category"),
    fields=("amount", "startDate", "endDate"),
    coercions={
        "amount": to_number,
        "startDate": to_timestamp,
        "endDate": to_timestamp,
    },
    not_found='No budget found for category "{category}".',
    conflict='A budget with category "{category}" already exists for this user.',
)

TRANSACTIONS = ResourceConfig(
    name="transaction",
    collection=TRANSACTIONS_COLLECTION,
    key_fields=("userId", "category", "transactionDate"),
    fields=("amount",),
    coercions={
        "amount": to_number,
        "transactionDate": to_timestamp,
    },
    not_found='No transaction found for category "{category}" on date "{transactionDate}".',
    conflict='A transaction already exists for category "{category}" on date "{transactionDate}".',
)

GOALS = ResourceConfig(
    name="goal",
    collection=GOALS_COLLECTION,
    key_fields=("userId", "goalName"),
    fields=("targetAmount", "currentAmount", "targetDate", "status"),
    coercions={
        "targetAmount": to_number,
        "currentAmount": to_number,
        "targetDate": to_timestamp,
    },
    defaults={
        "currentAmount": 0,
        "status": "In Progress",
    },
    not_found='No goal found named "{goalName}".',
    conflict='A goal named "{goalName}" already exists.',
)

TROPHIES = ResourceConfig(
    name="trophy",
    collection=TROPHIES_COLLECTION,
    key_fields=("trophyName",),
    fields=("displayName", "description", "points"),
    coercions={"points": to_number},
    defaults={
        "displayName": lambda document: document["trophyName"],
        "description": "",
        "points": 0,
    },
    not_found='No trophy found with name "{trophyName}".',
    conflict='A trophy named "{trophyName}" already exists.',
)

USER_TROPHIES = ResourceConfig(
    name="user trophy",
    collection=USER_TROPHIES_COLLECTION,
    key_fields=("userId", "trophyName"),
    fields=(),
    created_fields=("earnedAt",),
    not_found='User does not have trophy "{trophyName}".',
    conflict='User already has trophy "{trophyName}".',
)

ACTIVITY_LOG = ResourceConfig(
    name="activity",
    collection=ACTIVITY_COLLECTION,
    key_fields=("userId",),
    fields=("activityDescription",),
    created_fields=("timestamp",),
    unique=False,
)
