# prixfinance/trophies.py
import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from typing import Annotated, Any, Dict, List

from activity import record_activity
from database import get_db
from errors import internal_error
from identity import resolve_user_id
from models import TrophyRequest, UserTrophyRequest, require_fields
from repository import Repository
from resources import TROPHIES, USER_TROPHIES

trophies_router = APIRouter(
    prefix="/trophies",
    tags=["Trophies"],
)

user_trophies_router = APIRouter(
    prefix="/usersTrophies",
    tags=["Trophies"],
)

DEFAULT_TROPHIES = [
    {"trophyName": "first_budget", "displayName": "Budget Beginner", "description": "Created your first budget.", "points": 10},
    {"trophyName": "first_transaction", "displayName": "Bookkeeper", "description": "Recorded your first transaction.", "points": 10},
    {"trophyName": "first_goal", "displayName": "Goal Setter", "description": "Set your first savings goal.", "points": 10},
    {"trophyName": "goal_achieved", "displayName": "Goal Getter", "description": "Reached a savings goal.", "points": 50},
    {"trophyName": "budget_kept", "displayName": "On Budget", "description": "Finished a budget period under the limit.", "points": 30},
    {"trophyName": "streak_30", "displayName": "Consistent Tracker", "description": "Logged transactions 30 days in a row.", "points": 100},
]


def seed_default_trophies(db) -> List[str]:
    """Adds the missing DEFAULT_TROPHIES to the catalog. Returns the names created."""
    trophies = Repository(TROPHIES, db)
    created = []
    for trophy in DEFAULT_TROPHIES:
        key = {"trophyName": trophy["trophyName"]}
        if trophies.find(key) is None:
            trophies.create(key, trophy)
            created.append(trophy["trophyName"])
    return created


# ---------------- Catalog ----------------

@trophies_router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_trophy(body: TrophyRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "trophyName")
    try:
        trophy_name = payload["trophyName"]
        trophy_id = Repository(TROPHIES, db).create({"trophyName": trophy_name}, payload)
        return {"message": "Trophy created", "trophyName": trophy_name, "id": trophy_id}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error creating trophy: {e}")
        raise internal_error(e)


@trophies_router.post("/get")
async def get_trophy(body: TrophyRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "trophyName")
    try:
        return Repository(TROPHIES, db).get({"trophyName": payload["trophyName"]})
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error fetching trophy: {e}")
        raise internal_error(e)


@trophies_router.post("/list")
async def list_trophies(db: Annotated[Any, Depends(get_db)]):
    try:
        return Repository(TROPHIES, db).list()
    except Exception as e:
        logging.error(f"Error listing trophies: {e}")
        raise internal_error(e)


@trophies_router.post("/update")
async def update_trophy(body: TrophyRequest, db: Annotated[Any, Depends(get_db)]):
    """
    Renaming via `newTrophyName` does not touch usersTrophies records that
    still point at the old name; they drop out of /usersTrophies/list.
    """
    payload = body.payload()
    require_fields(payload, "trophyName")
    try:
        trophy_name = payload["trophyName"]
        new_name = payload.get("newTrophyName") or trophy_name
        Repository(TROPHIES, db).update(
            {"trophyName": trophy_name},
            payload,
            new_key={"trophyName": new_name},
        )
        return {"message": "Trophy updated", "oldName": trophy_name, "newName": new_name}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error updating trophy: {e}")
        raise internal_error(e)


@trophies_router.post("/delete")
async def delete_trophy(body: TrophyRequest, db: Annotated[Any, Depends(get_db)]):
    """Catalog delete only; earned records are left in place."""
    payload = body.payload()
    require_fields(payload, "trophyName")
    try:
        trophy_name = payload["trophyName"]
        Repository(TROPHIES, db).delete({"trophyName": trophy_name})
        return {"message": "Trophy deleted", "trophyName": trophy_name}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error deleting trophy: {e}")
        raise internal_error(e)


# ---------------- Earned trophies ----------------

def earn_trophy(user_id: str, trophy_name: str, db) -> str:
    # 404 when the trophy is not in the catalog, 400 when already earned
    Repository(TROPHIES, db).get({"trophyName": trophy_name})
    return Repository(USER_TROPHIES, db).create({"userId": user_id, "trophyName": trophy_name})


def list_earned_trophies(user_id: str, db) -> List[Dict[str, Any]]:
    """Earned records joined with their catalog entry; orphans are skipped."""
    catalog = Repository(TROPHIES, db)
    results = []
    for earned in Repository(USER_TROPHIES, db).list({"userId": user_id}):
        trophy = catalog.find({"trophyName": earned["trophyName"]})
        if trophy is None:
            continue
        results.append({
            "userTrophyId": earned["id"],
            "userId": user_id,
            "earnedAt": earned.get("earnedAt"),
            "trophyName": earned["trophyName"],
            "trophyId": trophy.id,
            **trophy.to_dict(),
        })
    return results


@user_trophies_router.post("/earn", status_code=status.HTTP_201_CREATED)
async def earn_user_trophy(
    body: UserTrophyRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    payload = body.payload()
    require_fields(payload, "email", "trophyName")
    try:
        user_id = resolve_user_id(payload["email"], db)
        trophy_name = payload["trophyName"]
        earn_trophy(user_id, trophy_name, db)
        background_tasks.add_task(record_activity, db, user_id, f"Earned trophy: {trophy_name}")
        return {"message": "User trophy earned", "trophyName": trophy_name, "userId": user_id}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error earning trophy: {e}")
        raise internal_error(e)


@user_trophies_router.post("/list")
async def list_user_trophies(body: UserTrophyRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "email")
    try:
        user_id = resolve_user_id(payload["email"], db)
        return list_earned_trophies(user_id, db)
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error listing user trophies: {e}")
        raise internal_error(e)


@user_trophies_router.post("/delete")
async def delete_user_trophy(
    body: UserTrophyRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    payload = body.payload()
    require_fields(payload, "email", "trophyName")
    try:
        user_id = resolve_user_id(payload["email"], db)
        trophy_name = payload["trophyName"]
        Repository(USER_TROPHIES, db).delete({"userId": user_id, "trophyName": trophy_name})
        background_tasks.add_task(record_activity, db, user_id, f"Removed trophy from user: {trophy_name}")
        return {"message": "User trophy removed", "trophyName": trophy_name}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error removing user trophy: {e}")
        raise internal_error(e)
