"""Bearer-token sessions for the API.

Route handlers receive a ``UserSession`` through ``require_session`` and pass
the user id on to the stores explicitly; nothing is kept in process-wide state.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe.config import config
from wardrobe.crud.users import get_user_by_id
from wardrobe.database.connection import get_db

logger = logging.getLogger(__name__)

COOKIE_NAME = "access_token"


@dataclass(frozen=True)
class UserSession:
    user_id: int
    email: str
    name: str
    access_token: str


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=15)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)
    return encoded_jwt


def token_for_user(user) -> str:
    return create_access_token(
        data={"sub": str(user.id)},
        expires_delta=timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    )


def extract_token(request: Request) -> Optional[str]:
    """Bearer header first, then the login cookie"""
    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            return token.strip()
    return request.cookies.get(COOKIE_NAME)


async def get_current_session(request: Request, db: AsyncSession = Depends(get_db)) -> Optional[UserSession]:
    """Dependency to get the current session - None when not authenticated"""
    token = extract_token(request)
    if not token:
        return None

    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except jwt.PyJWTError as e:
        logger.debug("Rejected token: %s", e)
        return None

    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        user_id = int(subject)
    except ValueError:
        return None

    # Verify user still exists in database
    user = await get_user_by_id(db, user_id)
    if user is None:
        return None

    return UserSession(user_id=user.id, email=user.email, name=user.name, access_token=token)


async def require_session(
    session: Optional[UserSession] = Depends(get_current_session)
) -> UserSession:
    """Dependency version that raises 401"""
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session
