# prixfinance/main.py
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import CORS_ORIGINS, configure_logging
from activity import activity_router
from budgets import budgets_router
from goals import goals_router
from transactions import transactions_router
from trophies import trophies_router, user_trophies_router
from users import users_router

configure_logging()

app = FastAPI(
    title="Prix Finance Backend",
    description="Bookkeeping API for users, settings, budgets, transactions, goals, trophies and activity.",
    version="1.0.0"
)

@app.on_event("startup")
async def startup_event():
    for route in app.routes:
        if hasattr(route, "path"):
            logging.debug(f"Route: {route.path}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router)
app.include_router(budgets_router)
app.include_router(transactions_router)
app.include_router(goals_router)
app.include_router(trophies_router)
app.include_router(user_trophies_router)
app.include_router(activity_router)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Every failure leaves as {"error": "<message>"} with the HTTP status."""
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else "Request body must be a JSON object."
    else:
        message = "Invalid request body."
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.get("/hello-world", response_class=PlainTextResponse, tags=["Health"])
async def hello_world():
    return "Hello World!"
