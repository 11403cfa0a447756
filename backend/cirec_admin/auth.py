"""Authentication for the admin back office."""
from datetime import timedelta
from typing import Optional
import logging
import time
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from .config import Settings, get_settings
from .database import get_db
from .models import Admin

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
logger = logging.getLogger(__name__)

# Bearer token scheme; missing credentials are reported as 401 below.
security = HTTPBearer(auto_error=False)


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception:
        # Invalid/corrupted hash should not crash login flow.
        logger.exception("Password verification failed due to invalid hash format")
        return False


def get_password_hash(password: str) -> str:
    """Hash password."""
    return pwd_context.hash(password)


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    now = int(time.time())
    if expires_delta:
        exp = now + int(expires_delta.total_seconds())
    else:
        exp = now + int(settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES) * 60
    to_encode.update({"exp": exp, "iat": now, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str, settings: Settings) -> dict:
    """Decode JWT token."""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise _credentials_error()


def authenticate_admin(db: Session, login: str, password: str) -> Optional[Admin]:
    admin = db.query(Admin).filter(Admin.login == login).first()
    if admin is None or not verify_password(password, admin.password_hash):
        return None
    return admin


def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Admin:
    """Get current authenticated admin."""
    if credentials is None or not credentials.credentials:
        raise _credentials_error("Not authenticated")

    payload = decode_token(credentials.credentials, settings)
    if payload.get("type") != "access":
        raise _credentials_error("Invalid token type")

    login = payload.get("sub")
    if not login:
        raise _credentials_error()

    admin = db.query(Admin).filter(Admin.login == str(login)).first()
    if admin is None:
        raise _credentials_error("Admin not found")
    return admin
