"""Admin authentication endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..auth import authenticate_admin, create_access_token, get_current_admin, get_password_hash, verify_password
from ..config import Settings, get_settings
from ..database import get_db
from ..domain_errors import DomainError
from ..envelope import ok
from ..models import Admin
from ..schemas import ChangePasswordRequest, LoginRequest

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login")
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Issue a bearer token for valid admin credentials."""
    admin = authenticate_admin(db, payload.username, payload.password)
    if admin is None:
        logger.warning("Failed admin login for %s", payload.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Admin Credentials",
        )
    token = create_access_token({"sub": admin.login}, settings)
    return ok(message="Admin Login Successful", token=token)


@router.post("/change-password")
def change_password(
    payload: ChangePasswordRequest,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Change the password of the signed-in admin."""
    if not verify_password(payload.old_password, current_admin.password_hash):
        raise DomainError(
            code="INVALID_OLD_PASSWORD",
            http_status=400,
            message="Please check your old password",
        )
    current_admin.password_hash = get_password_hash(payload.new_password)
    db.commit()
    logger.info("Admin %s changed password", current_admin.login)
    return ok(message="Password changed successfully")
