"""
Security utilities for authentication and authorization
Handles JWT tokens, password hashing, and the caller identity dependencies
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from quizrank.core.config import settings
from quizrank.core.database import get_db
from quizrank.core.exceptions import AuthenticationException, AuthorizationException
from quizrank.models import User, UserRole

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# HTTP Bearer scheme
security = HTTPBearer(auto_error=False)


class SecurityUtils:
    """Security utility functions"""

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a plain password against hashed password"""
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            return False

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Hash a password using bcrypt"""
        return pwd_context.hash(password)

    @staticmethod
    def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        """
        Create JWT access token

        Args:
            data: Data to encode in token
            expires_delta: Token expiration time

        Returns:
            Encoded JWT token
        """
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        to_encode.update({"exp": expire, "type": "access"})

        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> Dict[str, Any]:
        """
        Decode JWT token

        Raises:
            AuthenticationException: If token is invalid or expired
        """
        try:
            return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except JWTError as e:
            raise AuthenticationException("Could not validate credentials") from e


def create_user_token(user: User) -> str:
    return SecurityUtils.create_access_token(
        {"sub": str(user.id), "username": user.username, "role": user.role.value}
    )


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> int:
    """Authenticated caller's user id, taken from the bearer token"""
    if credentials is None:
        raise AuthenticationException("Not authenticated")

    payload = SecurityUtils.decode_token(credentials.credentials)
    if payload.get("type") != "access":
        raise AuthenticationException("Invalid token type")

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise AuthenticationException("Invalid authentication credentials") from e


def get_current_active_user(
    user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)
) -> User:
    """Load the caller from the database"""
    user = db.query(User).filter(User.id == user_id).first()

    if user is None:
        raise AuthenticationException("User not found")
    if not user.is_active:
        raise AuthorizationException("Inactive user")

    return user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Dependency to require admin role"""
    if current_user.role != UserRole.ADMIN:
        raise AuthorizationException("Admin access required")
    return current_user
