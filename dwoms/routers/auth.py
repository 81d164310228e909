"""
Authentication routes.

- Login: email + password. Any password is accepted for an existing email.
- Signup: name, email, password, role. Creates the user and signs them in.
- Both return a bearer token for the new session; logout ends it.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..auth.dependencies import get_current_user
from ..core.exceptions import DwomsError, to_http_exception
from ..models.user import LoginRequest, SessionResponse, SignupRequest, User
from ..services.auth_service import auth_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=SessionResponse)
async def login(payload: LoginRequest):
    try:
        session = await auth_service.login(payload.email, payload.password)
        return SessionResponse(token=session.token, user=session.user)
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"[Auth] Login error: {str(e)}")
        raise HTTPException(status_code=500, detail="An error occurred during login")


@router.post("/signup", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupRequest):
    try:
        session = await auth_service.signup(payload.name, payload.email, payload.password, payload.role)
        return SessionResponse(token=session.token, user=session.user)
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"[Auth] Signup error: {str(e)}")
        raise HTTPException(status_code=500, detail="An error occurred during signup")


@router.post("/logout")
async def logout(current_user: User = Depends(get_current_user)):
    await auth_service.logout()
    return {"success": True, "message": "Logged out"}


@router.get("/me", response_model=User)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
