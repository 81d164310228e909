from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import logging

from ..core.exceptions import NotAuthenticated
from ..models.user import User
from ..services.auth_service import auth_service
from .permissions import Capability, has_capability

security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)

async def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> User:
    """
    Resolve the bearer token against the active session.
    Raises 401 when there is no token or it does not match.
    """
    token = credentials.credentials if credentials else None
    try:
        user = await auth_service.resolve(token)
    except NotAuthenticated as e:
        logger.warning(f"[Auth] Rejected request: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user

def require_capability(capability: Capability):
    def capability_checker(current_user: User = Depends(get_current_user)) -> User:
        if not has_capability(current_user.role, capability):
            logger.warning(f"[Auth] Capability check failed: role '{current_user.role.value}' lacks '{capability.value}'")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required capability: {capability.value}, current role: {current_user.role.value}"
            )
        return current_user
    return capability_checker
