# prixfinance/users.py
import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from typing import Annotated, Any

from activity import record_activity
from database import get_db
from errors import internal_error
from identity import resolve_user_id
from models import SettingsRequest, UserRequest, require_fields
from repository import Repository
from resources import USER_SETTINGS, USERS

users_router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@users_router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_user(body: UserRequest, db: Annotated[Any, Depends(get_db)]):
    """Registers a user. Extra body keys become profile fields."""
    payload = body.payload()
    require_fields(payload, "email")
    try:
        user_id = Repository(USERS, db).create({"email": payload["email"]}, payload)
        return {"message": "User created", "userId": user_id}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error creating user: {e}")
        raise internal_error(e)


@users_router.post("/get")
async def get_user(body: UserRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "email")
    try:
        return Repository(USERS, db).get({"email": payload["email"]})
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error fetching user: {e}")
        raise internal_error(e)


@users_router.post("/update")
async def update_user(
    body: UserRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    """Merges profile fields into the user. The email itself cannot change."""
    payload = body.payload()
    require_fields(payload, "email")
    try:
        user_id = Repository(USERS, db).update({"email": payload["email"]}, payload)
        background_tasks.add_task(record_activity, db, user_id, "Updated user profile")
        return {"message": "User updated", "userId": user_id}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error updating user: {e}")
        raise internal_error(e)


@users_router.post("/settings/get")
async def get_settings(body: SettingsRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "email")
    try:
        user_id = resolve_user_id(payload["email"], db)
        return Repository(USER_SETTINGS, db).get({"userId": user_id})
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error fetching settings: {e}")
        raise internal_error(e)


@users_router.post("/settings/update")
async def update_settings(
    body: SettingsRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    """Settings live in userSettings/{userId}; the first update creates them."""
    payload = body.payload()
    require_fields(payload, "email")
    try:
        user_id = resolve_user_id(payload["email"], db)
        settings = {name: value for name, value in payload.items() if name != "email"}
        Repository(USER_SETTINGS, db).update({"userId": user_id}, settings)
        background_tasks.add_task(record_activity, db, user_id, "Updated user settings")
        return {"message": "Settings updated"}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error updating settings: {e}")
        raise internal_error(e)
