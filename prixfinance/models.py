# prixfinance/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional

from errors import ValidationError
from resources import is_missing


def require_fields(payload: Dict[str, Any], *fields: str) -> None:
    """400s with every missing field named, in the order given."""
    missing = [name for name in fields if is_missing(payload.get(name))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}.")


class FinanceRequest(BaseModel):
    # Presence is checked per endpoint, unknown keys are kept for open resources
    model_config = ConfigDict(extra="allow")

    def payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# === Users ===
class EmailRequest(FinanceRequest):
    email: Optional[str] = Field(None, description="User's email, the only external handle for a user")

class UserRequest(EmailRequest):
    """Any extra keys are stored as profile fields."""

class SettingsRequest(EmailRequest):
    """Any extra keys are stored as settings."""

class ActivityListRequest(EmailRequest):
    pass

# === Budget ===
class BudgetRequest(EmailRequest):
    category: Optional[str] = Field(None, description="Spending category, unique per user")
    newCategory: Optional[str] = Field(None, description="Rename the category (update only)")
    amount: Optional[Any] = Field(None, description="Number or numeric string")
    startDate: Optional[Any] = Field(None, description="Date (YYYY-MM-DD)")
    endDate: Optional[Any] = Field(None, description="Date (YYYY-MM-DD)")

# === Transaction ===
class TransactionRequest(EmailRequest):
    category: Optional[str] = Field(None, description="Category name")
    transactionDate: Optional[Any] = Field(None, description="Date (YYYY-MM-DD)")
    newCategory: Optional[str] = Field(None, description="Move to another category (update only)")
    newDate: Optional[Any] = Field(None, description="Move to another date (update only)")
    amount: Optional[Any] = Field(None, description="Number or numeric string")

# === Goal ===
class GoalRequest(EmailRequest):
    goalName: Optional[str] = Field(None, description="Goal name, unique per user")
    newGoalName: Optional[str] = Field(None, description="Rename the goal (update only)")
    targetAmount: Optional[Any] = None
    currentAmount: Optional[Any] = None
    targetDate: Optional[Any] = Field(None, description="Target date (YYYY-MM-DD)")
    status: Optional[str] = Field(None, description='Defaults to "In Progress"')

# === Trophy catalog ===
class TrophyRequest(FinanceRequest):
    trophyName: Optional[str] = Field(None, description="Unique trophy identifier")
    newTrophyName: Optional[str] = Field(None, description="Rename the trophy (update only)")
    displayName: Optional[str] = Field(None, description="Defaults to trophyName")
    description: Optional[str] = None
    points: Optional[Any] = None

class UserTrophyRequest(EmailRequest):
    trophyName: Optional[str] = None
