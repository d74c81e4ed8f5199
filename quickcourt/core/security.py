import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from quickcourt.config import settings
from quickcourt.database import get_db
from quickcourt.models.user import User
from quickcourt.models.enums import UserStatus
from quickcourt.core.exceptions import AuthException, NotAuthorizedError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})

    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt

def create_user_token(user: User) -> str:
    """Token handed out by register/login; the payload is what the API trusts afterwards."""
    return create_access_token(
        data={"sub": user.email, "id": user.id, "role": user.role}
    )

def verify_token(token: str):
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """
    Resolve the acting user from the bearer token.

    Missing, malformed or expired tokens give 401. A banned account gets 403
    even with an otherwise valid token.
    """
    if token is None:
        raise AuthException("No token, authorization denied")

    payload = verify_token(token)
    if payload is None:
        raise AuthException("Token is not valid")

    user_id = payload.get("id")
    if user_id is None:
        raise AuthException("Token is not valid")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise AuthException("Token is not valid")

    if user.status == UserStatus.banned.value:
        logger.warning(f"[AUTH] Banned user {user.id} tried to use the API")
        raise NotAuthorizedError("Account has been banned")

    return user
