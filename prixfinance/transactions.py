# prixfinance/transactions.py
import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from typing import Annotated, Any

from activity import record_activity
from database import get_db
from errors import internal_error
from identity import resolve_user_id
from models import TransactionRequest, require_fields
from repository import Repository
from resources import TRANSACTIONS

# At most one transaction per (user, category, transactionDate)
transactions_router = APIRouter(
    prefix="/transactions",
    tags=["Transactions"],
)


def transaction_key(user_id: str, payload: dict) -> dict:
    return {
        "userId": user_id,
        "category": payload["category"],
        "transactionDate": payload["transactionDate"],
    }


@transactions_router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    body: TransactionRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    payload = body.payload()
    require_fields(payload, "email", "category", "amount", "transactionDate")
    try:
        user_id = resolve_user_id(payload["email"], db)
        transaction_id = Repository(TRANSACTIONS, db).create(transaction_key(user_id, payload), payload)
        background_tasks.add_task(
            record_activity, db, user_id,
            f"Created transaction: {payload['category']} @ {payload['transactionDate']}",
        )
        return {"message": "Transaction created", "id": transaction_id}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error creating transaction: {e}")
        raise internal_error(e)


@transactions_router.post("/get")
async def get_transaction(body: TransactionRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "email", "category", "transactionDate")
    try:
        user_id = resolve_user_id(payload["email"], db)
        return Repository(TRANSACTIONS, db).get(transaction_key(user_id, payload))
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error fetching transaction: {e}")
        raise internal_error(e)


@transactions_router.post("/update")
async def update_transaction(
    body: TransactionRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    """
    Updates the amount and/or moves the transaction to `newCategory` /
    `newDate`. Moving checks the destination key for an existing transaction
    first and leaves the original untouched on conflict.
    """
    payload = body.payload()
    require_fields(payload, "email", "category", "transactionDate")
    try:
        user_id = resolve_user_id(payload["email"], db)
        transaction_id = Repository(TRANSACTIONS, db).update(
            transaction_key(user_id, payload),
            payload,
            new_key={
                "category": payload.get("newCategory"),
                "transactionDate": payload.get("newDate"),
            },
        )
        background_tasks.add_task(
            record_activity, db, user_id,
            f"Updated transaction {payload['category']} @ {payload['transactionDate']}",
        )
        return {"message": "Transaction updated", "id": transaction_id}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error updating transaction: {e}")
        raise internal_error(e)


@transactions_router.post("/list")
async def list_transactions(body: TransactionRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "email")
    try:
        user_id = resolve_user_id(payload["email"], db)
        return Repository(TRANSACTIONS, db).list({"userId": user_id})
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error listing transactions: {e}")
        raise internal_error(e)


@transactions_router.post("/list-by-category")
async def list_transactions_by_category(body: TransactionRequest, db: Annotated[Any, Depends(get_db)]):
    payload = body.payload()
    require_fields(payload, "email", "category")
    try:
        user_id = resolve_user_id(payload["email"], db)
        return Repository(TRANSACTIONS, db).list({"userId": user_id, "category": payload["category"]})
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error listing transactions by category: {e}")
        raise internal_error(e)


@transactions_router.post("/delete")
async def delete_transaction(
    body: TransactionRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[Any, Depends(get_db)],
):
    payload = body.payload()
    require_fields(payload, "email", "category", "transactionDate")
    try:
        user_id = resolve_user_id(payload["email"], db)
        Repository(TRANSACTIONS, db).delete(transaction_key(user_id, payload))
        background_tasks.add_task(
            record_activity, db, user_id,
            f"Deleted transaction {payload['category']} @ {payload['transactionDate']}",
        )
        return {"message": "Transaction deleted"}
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Error deleting transaction: {e}")
        raise internal_error(e)
