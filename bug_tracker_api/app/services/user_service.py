"""
Business logic for users.

Users are the identity collaborator of the tracker: ticket assignment
refers to them and ``get_current_user`` resolves the authenticated
caller.  The first registered user becomes administrator; everyone
after that gets the ordinary user role.
"""

import logging
from typing import Any, Dict, List, Optional

from bug_tracker_api.app.core.db import ROLE_ADMIN, ROLE_USER
from bug_tracker_api.app.core.errors import BadRequestAlertException
from bug_tracker_api.app.core.security import hash_password, verify_password
from bug_tracker_api.app.domain.entities import User
from bug_tracker_api.app.repositories import UserRepository
from bug_tracker_api.app.schemas.user import UserCreate

logger = logging.getLogger(__name__)


class LoginAlreadyUsed(BadRequestAlertException):
    def __init__(self) -> None:
        super().__init__("Login name already used!", "userManagement", "userexists")


class UserService:
    """Service for registering, authenticating and looking up users."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> User:
        """Register a user with a hashed password.

        Raises ``LoginAlreadyUsed`` when the login is taken.
        """
        login = data.login.lower()
        if await UserRepository.find_by_login(login) is not None:
            raise LoginAlreadyUsed()
        role_id = ROLE_ADMIN if await UserRepository.count() == 0 else ROLE_USER
        user = User(login=login, email=data.email, full_name=data.full_name, role_id=role_id)
        await UserRepository.save(user, password_hash=hash_password(data.password))
        logger.info("Registered user %s with role %s", login, role_id)
        return user

    @classmethod
    async def authenticate(cls, login: str, password: str) -> Optional[User]:
        """Return the user if the credentials match an enabled account."""
        login = login.lower()
        if not verify_password(password, await UserRepository.find_password_hash(login)):
            return None
        user = await UserRepository.find_by_login(login)
        if user is None or user.disabled:
            return None
        return user

    @classmethod
    async def get_current_user(cls, current_user: Dict[str, Any]) -> Optional[User]:
        """Resolve the payload produced by ``get_current_user`` to a ``User``."""
        user_id = current_user.get("user_id")
        if user_id is None:
            return None
        return await UserRepository.find_by_id(user_id)

    @classmethod
    async def list_users(cls) -> List[User]:
        return await UserRepository.find_all()
