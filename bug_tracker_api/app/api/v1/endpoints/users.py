"""
User endpoints for API v1.

Registration and login are open; the first account registered becomes
the administrator.  ``GET /users/me`` returns the caller and
``GET /users`` lists every account (admin only).
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from bug_tracker_api.app.core.db import ROLE_ADMIN
from bug_tracker_api.app.core.security import create_access_token, get_current_user, require_roles
from bug_tracker_api.app.schemas.user import Token, UserCreate, UserLogin, UserRead
from bug_tracker_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(user_in: UserCreate) -> UserRead:
    """Register a new account; HTTP 400 if the login is already used."""
    logger.debug("REST request to register User : %s", user_in.login)
    user = await UserService.create_user(user_in)
    return UserRead.model_validate(user)


@router.post("/login", response_model=Token)
async def login_user(credentials: UserLogin) -> Token:
    """Exchange login and password for a bearer token."""
    user = await UserService.authenticate(credentials.login, credentials.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return Token(access_token=create_access_token({"sub": user.login}))


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: dict = Depends(get_current_user)) -> UserRead:
    user = await UserService.get_current_user(current_user)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserRead.model_validate(user)


@router.get("", response_model=List[UserRead])
async def list_users(current_user: dict = Depends(require_roles(ROLE_ADMIN))) -> List[UserRead]:
    return [UserRead.model_validate(user) for user in await UserService.list_users()]
