"""
Session/identity management.

The signed-in user is an explicit ``Session`` persisted under the current-user
key: created by ``login``/``signup``, gone after ``logout``. There is one
active session per store. Passwords are accepted as given (demo behavior).
"""

from typing import Optional
import asyncio
import logging
import secrets

from pydantic import ValidationError

from ..core.config import settings
from ..core.exceptions import NotAuthenticated, NotFound
from ..database.collections import COLLECTIONS
from ..database.storage import LocalStorage, storage
from ..models.user import Session, User, UserRole
from .collection_service import utcnow
from .user_service import UserService, user_service

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Optional[LocalStorage] = None, users: Optional[UserService] = None,
                 delay_seconds: Optional[float] = None):
        self.db = db or storage
        self.users = users or user_service
        self.delay_seconds = settings.AUTH_DELAY_SECONDS if delay_seconds is None else delay_seconds

    async def _simulate_latency(self) -> None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

    def _start_session(self, user: User) -> Session:
        session = Session(token=secrets.token_urlsafe(32), user=user, created_at=utcnow())
        self.db.set(COLLECTIONS["current_user"], session.model_dump(mode="json"))
        return session

    async def login(self, email: str, password: str) -> Session:
        await self._simulate_latency()
        user = await self.users.get_user_by_email(email)
        if not user:
            logger.warning(f"[Auth] Login failed for unknown email: {email}")
            raise NotAuthenticated("Invalid email or password")
        # Any password is accepted for an existing account
        session = self._start_session(user)
        logger.info(f"[Auth] Logged in {user.email} with role: {user.role.value}")
        return session

    async def signup(self, name: str, email: str, password: str, role: UserRole) -> Session:
        await self._simulate_latency()
        user = await self.users.add_user(name=name, email=email, role=role)
        session = self._start_session(user)
        logger.info(f"[Auth] Signed up {user.email} with role: {user.role.value}")
        return session

    async def logout(self) -> None:
        session = self.current_session()
        self.db.remove(COLLECTIONS["current_user"])
        if session:
            logger.info(f"[Auth] Logged out {session.user.email}")

    def current_session(self) -> Optional[Session]:
        raw = self.db.get(COLLECTIONS["current_user"], None)
        if not raw:
            return None
        try:
            return Session.model_validate(raw)
        except ValidationError:
            logger.debug("[Auth] Stored session unreadable, treating as signed out")
            return None

    async def resolve(self, token: Optional[str]) -> User:
        """
        The user behind ``token``, or NotAuthenticated.

        Returns the current user record rather than the login snapshot, so a
        role change takes effect without signing in again and a deleted
        account loses access.
        """
        session = self.current_session()
        if not token or not session or not secrets.compare_digest(session.token, token):
            raise NotAuthenticated("Not authenticated")
        try:
            return await self.users.get_user(session.user.id)
        except NotFound:
            logger.warning(f"[Auth] Session user {session.user.id} no longer exists")
            raise NotAuthenticated("Account no longer exists")


auth_service = AuthService()
