# prixfinance/goals.py
import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from typing import Annotated, Any

from activity import record_activity
from database import get_db
from errors import internal_error
from identity import resolve_user_id
from models import GoalRequest, require_fields
from repository import Repository
from resources import GOALS

goals_router = APIRouter(
    prefix="/goals",
    tags=["Goals"],
)


@goals_router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_goal(
    body: GoalRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    """currentAmount defaults to 0 and status to "In Progress"."""
    payload = body.payload()
    require_fields(payload, "email", "goalName", "targetAmount", "targetDate")
    try:
        user_id = resolve_user_id(payload["email"], db)
        goal_name = payload["goalName"]
        goal_id = Repository(GOALS, db).create({"userId": user_id, "goalName": goal_name}, payload)
        background_tasks.add_task(record_activity, db, user_id, f"Created goal: {goal_name}")
        return {"message": "Goal created", "id": goal_id}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error creating goal: {e}")
        raise internal_error(e)


@goals_router.post("/get")
async def get_goal(body: GoalRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "email", "goalName")
    try:
        user_id = resolve_user_id(payload["email"], db)
        return Repository(GOALS, db).get({"userId": user_id, "goalName": payload["goalName"]})
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error fetching goal: {e}")
        raise internal_error(e)


@goals_router.post("/update")
async def update_goal(
    body: GoalRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    payload = body.payload()
    require_fields(payload, "email", "goalName")
    try:
        user_id = resolve_user_id(payload["email"], db)
        goal_name = payload["goalName"]
        goal_id = Repository(GOALS, db).update(
            {"userId": user_id, "goalName": goal_name},
            payload,
            new_key={"goalName": payload.get("newGoalName")},
        )
        background_tasks.add_task(record_activity, db, user_id, f"Updated goal: {goal_name}")
        return {"message": "Goal updated", "id": goal_id}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error updating goal: {e}")
        raise internal_error(e)


@goals_router.post("/list")
async def list_goals(body: GoalRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "email")
    try:
        user_id = resolve_user_id(payload["email"], db)
        return Repository(GOALS, db).list({"userId": user_id})
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error listing goals: {e}")
        raise internal_error(e)


@goals_router.post("/list-by-status")
async def list_goals_by_status(body: GoalRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "email", "status")
    try:
        user_id = resolve_user_id(payload["email"], db)
        return Repository(GOALS, db).list({"userId": user_id, "status": payload["status"]})
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error listing goals by status: {e}")
        raise internal_error(e)


@goals_router.post("/delete")
async def delete_goal(
    body: GoalRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    payload = body.payload()
    require_fields(payload, "email", "goalName")
    try:
        user_id = resolve_user_id(payload["email"], db)
        goal_name = payload["goalName"]
        Repository(GOALS, db).delete({"userId": user_id, "goalName": goal_name})
        background_tasks.add_task(record_activity, db, user_id, f"Deleted goal: {goal_name}")
        return {"message": "Goal deleted"}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error deleting goal: {e}")
        raise internal_error(e)
