# backend/freshgrad/main.py
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .database import SessionLocal, get_db, init_schema, ping
from .logging_config import configure_logging

from .apps.accounts.router import router as accounts_router
from .apps.accounts import services as account_services
from .apps.audit.router import router as audit_router
from .apps.candidates.router import router as candidates_router
from .apps.corrections.router import router as corrections_router
from .apps.courses.router import router as courses_router
from .apps.mentors.router import router as mentors_router
from .apps.notifications.router import router as notifications_router
from .apps.reference.router import router as reference_router
from .spa import api_fallback_router, spa_router

configure_logging()
logger = logging.getLogger(__name__)

AUTO_CREATE_SCHEMA = os.getenv("AUTO_CREATE_SCHEMA", "false").lower() in {"1", "true", "yes", "on"}


def _allowed_origins() -> List[str]:
    """
    Parse CORS_ALLOWED_ORIGINS from env.

    Accepts comma-separated origins. If unset, defaults to local dev ports.
    """
    raw = os.getenv("CORS_ALLOWED_ORIGINS", "")
    if raw:
        origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
        if origins:
            return origins
    return [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
        "http://localhost:4173",
        "http://localhost:8080",
    ]


def _seed_default_admin() -> None:
    email = os.getenv("DEFAULT_ADMIN_EMAIL")
    password = os.getenv("DEFAULT_ADMIN_PASSWORD")
    if not (email and password):
        return
    db = SessionLocal()
    try:
        _, created = account_services.ensure_default_admin(
            db,
            email=email,
            password=password,
            name=os.getenv("DEFAULT_ADMIN_NAME", "Administrator"),
        )
        db.commit()
        if created:
            logger.info("Default admin account created: %s", email.strip().lower())
    finally:
        db.close()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if AUTO_CREATE_SCHEMA:
        init_schema()
    _seed_default_admin()
    yield


app = FastAPI(title="FreshGrad Tracker API", version="1.0.0", lifespan=lifespan)
cors_origins = _allowed_origins()
allow_credentials = "*" not in cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Store error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/health", tags=["health"])
def health(db: Session = Depends(get_db)):
    try:
        ping(db)
        database = "connected"
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)
        database = "disconnected"
    return {
        "status": "ok",
        "database": database,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(accounts_router)
app.include_router(candidates_router)
app.include_router(mentors_router)
app.include_router(courses_router)
app.include_router(corrections_router)
app.include_router(notifications_router)
app.include_router(audit_router)
app.include_router(reference_router)

# Catch-alls last.
app.include_router(api_fallback_router)
app.include_router(spa_router)
