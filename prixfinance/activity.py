# prixfinance/activity.py
import logging
from typing import Annotated, Any, Optional
from fastapi import APIRouter, Depends, HTTPException

import config
from database import get_db
from errors import internal_error
from identity import resolve_user_id
from models import ActivityListRequest
from repository import Repository
from resources import ACTIVITY_LOG

activity_router = APIRouter(
    prefix="/activity",
    tags=["Activity"],
)


def record_activity(db, user_id: Optional[str], activity_description: str) -> None:
    """
    Appends an entry to the user's activity log.

    Best-effort: runs after the response has been sent, and a failed write is
    logged rather than raised since the primary mutation already succeeded.
    """
    if not user_id or not config.ACTIVITY_LOG_ENABLED:
        return
    try:
        Repository(ACTIVITY_LOG, db).create(
            {"userId": user_id},
            {"activityDescription": activity_description},
        )
    except Exception as e:
        logging.error(f"Failed to record activity for user {user_id}: {e}")


@activity_router.post("/list")
async def list_activity(
    db: Annotated[Any, Depends(get_db)],
    body: Optional[ActivityListRequest] = None,
):
    """Activity for one user when `email` is given, otherwise for everyone."""
    try:
        filters = {}
        if body is not None and body.email:
            filters["userId"] = resolve_user_id(body.email, db)
        return Repository(ACTIVITY_LOG, db).list(filters)
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error listing activity: {e}")
        raise internal_error(e)
