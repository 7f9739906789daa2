"""Main FastAPI application with modularized routes."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.config import CORS_ORIGINS
from api.database import init_db
from api.routes import auth, questions, results
from core.logging_setup import setup_console_logging

setup_console_logging()

logger = logging.getLogger(__name__)

app = FastAPI(title="Quiz Portal API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Startup events
@app.on_event("startup")
def startup_events() -> None:
    """Initialize database on startup."""
    init_db()


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Report store failures as 500 with a message the client can show."""
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"message": "Database error", "error": exc.__class__.__name__},
    )


# Include routers
app.include_router(auth.router)
app.include_router(questions.router)
app.include_router(results.router)
