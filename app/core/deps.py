import logging
import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.context import RequestContext
from app.core.security import decode_access_token
from app.database import get_db
from app.models.user import User

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from JWT token.
    Returns 401 if token is invalid or user not found.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_access_token(token)
    if not payload or payload.get("sub") is None:
        logger.warning("[AUTH] Invalid token or missing 'sub' field")
        raise credentials_exception

    try:
        user_id = uuid.UUID(payload["sub"])
    except ValueError:
        logger.warning(f"[AUTH] Malformed subject in token: {payload['sub']}")
        raise credentials_exception

    user = db.get(User, user_id)
    if user is None or not user.is_active:
        logger.warning(f"[AUTH] User not found or inactive: {user_id}")
        raise credentials_exception

    return user


def get_request_context(current_user: User = Depends(get_current_user)) -> RequestContext:
    """Explicit principal handed to every lifecycle call."""
    return RequestContext.for_user(current_user)
