"""
Domain errors for DWOMS.

Every error is recoverable: routers turn them into an HTTP response carrying
``status_code`` and the message, the store and the process stay intact.
"""

from fastapi import HTTPException, status


class DwomsError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTransition(DwomsError):
    """A task status advance outside the workflow."""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move task from '{_label(current)}' to '{_label(target)}'")


class DuplicateEmail(DwomsError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"A user with email '{email}' already exists")


class SelfDeletion(DwomsError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("You can't delete your own account")


class SelfRoleChange(DwomsError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("You can't change your own role")


class NotAuthenticated(DwomsError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotAuthorized(DwomsError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(DwomsError):
    status_code = status.HTTP_404_NOT_FOUND


def _label(value) -> str:
    return getattr(value, "value", value)


def to_http_exception(error: DwomsError) -> HTTPException:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, NotAuthenticated) else None
    return HTTPException(status_code=error.status_code, detail=error.message, headers=headers)
