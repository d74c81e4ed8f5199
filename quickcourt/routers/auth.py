import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from quickcourt.database import get_db
from quickcourt.models.enums import UserStatus
from quickcourt.models.user import User
from quickcourt.schemas.auth import Login, Register, Token
from quickcourt.core.exceptions import NotAuthorizedError
from quickcourt.core.security import create_user_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(user_data: Register, db: Session = Depends(get_db)):
    """Create a player or facility owner account and log it in"""
    email = user_data.email.lower()

    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists"
        )

    if user_data.phone:
        phone_taken = db.query(User).filter(User.phone == user_data.phone).first()
        if phone_taken:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Phone number already registered"
            )

    new_user = User(
        name=user_data.name,
        email=email,
        password_hash=get_password_hash(user_data.password),
        phone=user_data.phone,
        role=user_data.role.value,
        status=UserStatus.active.value,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info(f"👤 [AUTH] User {new_user.id} registered as {new_user.role}")
    return {
        "access_token": create_user_token(new_user),
        "token_type": "bearer",
        "user": new_user,
    }

@router.post("/login", response_model=Token)
def login(credentials: Login, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == credentials.email.lower()).first()

    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning(f"❌ [AUTH] Failed login for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid credentials"
        )

    if user.status == UserStatus.banned.value:
        logger.warning(f"🚫 [AUTH] Banned user {user.id} tried to log in")
        raise NotAuthorizedError("Account has been banned")

    return {
        "access_token": create_user_token(user),
        "token_type": "bearer",
        "user": user,
    }
