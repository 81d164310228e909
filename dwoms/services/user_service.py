from typing import List, Optional
import logging

from ..core.exceptions import DuplicateEmail, NotFound, SelfDeletion, SelfRoleChange
from ..models.user import User, UserRole
from .collection_service import CollectionService, utcnow

logger = logging.getLogger(__name__)


class UserService(CollectionService[User]):
    collection = "users"
    model = User

    async def list_users(self) -> List[User]:
        return self._load()

    async def get_user(self, user_id: str) -> User:
        for user in self._load():
            if user.id == user_id:
                return user
        raise NotFound(f"User '{user_id}' not found")

    async def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        for user in self._load():
            if user.email.lower() == wanted:
                return user
        return None

    async def get_workers(self) -> List[User]:
        return await self.get_users_by_role(UserRole.WORKER)

    async def get_users_by_role(self, role: UserRole) -> List[User]:
        return [u for u in self._load() if u.role == role]

    async def add_user(self, name: str, email: str, role: UserRole, created_by: Optional[str] = None) -> User:
        """Create a user. Raises DuplicateEmail if the email is taken in any letter case."""
        users = self._load()
        email = email.strip()
        if any(u.email.lower() == email.lower() for u in users):
            logger.warning(f"[Users] Rejected duplicate email: {email}")
            raise DuplicateEmail(email)

        user = User(
            id=self.generate_id(),
            name=name,
            email=email,
            role=role,
            created_by=created_by,
            created_at=utcnow(),
        )
        users.append(user)
        self._save(users)
        logger.info(f"[Users] Created {user.id} ({user.role.value})" + (f" by {created_by}" if created_by else ""))
        return user

    async def update_user_role(self, user_id: str, new_role: UserRole, current_user_id: str) -> User:
        """Change another user's role. Changing the role of the calling account is refused."""
        if user_id == current_user_id:
            logger.warning(f"[Users] Refused self role change of {user_id}")
            raise SelfRoleChange(user_id)

        users = self._load()
        for i, user in enumerate(users):
            if user.id == user_id:
                users[i] = user.model_copy(update={"role": UserRole(new_role)})
                self._save(users)
                logger.info(f"[Users] Role of {user_id} changed {user.role.value} -> {users[i].role.value}")
                return users[i]
        raise NotFound(f"User '{user_id}' not found")

    async def delete_user(self, user_id: str, current_user_id: str) -> None:
        """Remove a user. Deleting the account that is making the call is refused."""
        if user_id == current_user_id:
            logger.warning(f"[Users] Refused self-deletion of {user_id}")
            raise SelfDeletion(user_id)

        users = self._load()
        remaining = [u for u in users if u.id != user_id]
        if len(remaining) == len(users):
            raise NotFound(f"User '{user_id}' not found")
        self._save(remaining)
        logger.info(f"[Users] Deleted {user_id}")


user_service = UserService()
