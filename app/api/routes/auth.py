"""
Authentication Endpoints
User registration, login and profile
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_user
from app.core.exceptions import ConflictError, NotFoundError
from app.core.security import verify_password, get_password_hash, create_access_token
from app.database import get_db
from app.db.store import EntityStore
from app.db.unit_of_work import atomic
from app.models.organization import Organization
from app.models.user import User
from app.schemas.user import UserCreate, UserLogin, UserResponse, Token

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    """Register a new user, joining an organization only through its verification code"""
    store = EntityStore(db)

    with atomic(db, "register user"):
        if store.list(User, email=user_in.email):
            raise ConflictError(f"Email already registered: {user_in.email}")

        organization_id = None
        if user_in.verification_code:
            matches = store.list(Organization, verification_code=user_in.verification_code)
            if not matches:
                raise NotFoundError(f"Organization not found for code: {user_in.verification_code}")
            organization_id = matches[0].id

        user = store.save(
            User(
                email=user_in.email,
                full_name=user_in.full_name,
                phone=user_in.phone,
                hashed_password=get_password_hash(user_in.password),
                role=user_in.role.value,
                organization_id=organization_id,
            )
        )

    logger.info(f"[AUTH] Registered user {user.id} ({user.email})")
    return user


@router.post("/login", response_model=Token)
def login(user_credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get access token"""
    users = EntityStore(db).list(User, email=user_credentials.email)
    user = users[0] if users else None

    if not user or not verify_password(user_credentials.password, user.hashed_password):
        logger.warning(f"[AUTH] Failed login for {user_credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(data={"sub": str(user.id)})
    return Token(access_token=access_token, user_id=user.id, role=user.role)


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return current_user
