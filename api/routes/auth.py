"""Admin authentication routes."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session as DbSession

from api.config import ACCESS_TOKEN_EXPIRE_MINUTES
from api.database import get_db
from api.models.auth import AdminLogin, TokenResponse
from api.services.auth_service import authenticate_admin, create_admin_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    data: AdminLogin,
    db: Annotated[DbSession, Depends(get_db)],
) -> TokenResponse:
    """Login and get an admin JWT."""
    admin = authenticate_admin(db, data.username, data.password)
    if admin is None:
        logger.warning("Failed admin login for %r", data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    return TokenResponse(
        token=create_admin_token(),
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
