# prixfinance/budgets.py
import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from typing import Annotated, Any

from activity import record_activity
from database import get_db
from errors import internal_error
from identity import resolve_user_id
from models import BudgetRequest, require_fields
from repository import Repository
from resources import BUDGETS

# One budget per (user, category)
budgets_router = APIRouter(
    prefix="/budgets",
    tags=["Budgets"],
)


@budgets_router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_budget(
    body: BudgetRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    payload = body.payload()
    require_fields(payload, "email", "category", "amount", "startDate", "endDate")
    try:
        user_id = resolve_user_id(payload["email"], db)
        category = payload["category"]
        budget_id = Repository(BUDGETS, db).create({"userId": user_id, "category": category}, payload)
        background_tasks.add_task(record_activity, db, user_id, f"Created a new budget for category: {category}")
        return {"message": "Budget created", "id": budget_id}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error creating budget: {e}")
        raise internal_error(e)


@budgets_router.post("/get")
async def get_budget(body: BudgetRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "email", "category")
    try:
        user_id = resolve_user_id(payload["email"], db)
        return Repository(BUDGETS, db).get({"userId": user_id, "category": payload["category"]})
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error fetching budget: {e}")
        raise internal_error(e)


@budgets_router.post("/update")
async def update_budget(
    body: BudgetRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    """Partial update of amount/startDate/endDate; `newCategory` re-keys the budget."""
    payload = body.payload()
    require_fields(payload, "email", "category")
    try:
        user_id = resolve_user_id(payload["email"], db)
        category = payload["category"]
        budget_id = Repository(BUDGETS, db).update(
            {"userId": user_id, "category": category},
            payload,
            new_key={"category": payload.get("newCategory")},
        )
        background_tasks.add_task(record_activity, db, user_id, f"Updated budget for category: {category}")
        return {"message": "Budget updated", "id": budget_id}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error updating budget: {e}")
        raise internal_error(e)


@budgets_router.post("/list")
async def list_budgets(body: BudgetRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "email")
    try:
        user_id = resolve_user_id(payload["email"], db)
        return Repository(BUDGETS, db).list({"userId": user_id})
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error listing budgets: {e}")
        raise internal_error(e)


@budgets_router.post("/delete")
async def delete_budget(
    body: BudgetRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    payload = body.payload()
    require_fields(payload, "email", "category")
    try:
        user_id = resolve_user_id(payload["email"], db)
        category = payload["category"]
        Repository(BUDGETS, db).delete({"userId": user_id, "category": category})
        background_tasks.add_task(record_activity, db, user_id, f"Deleted budget for category: {category}")
        return {"message": "Budget deleted"}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error deleting budget: {e}")
        raise internal_error(e)
