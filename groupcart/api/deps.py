"""FastAPI dependencies resolving the caller's identity."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from groupcart.core.security import decode_token
from groupcart.database import get_db
from groupcart.models.user import User

# Bearer tokens are issued by the login endpoint
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth/login")


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the bearer token to a stored user.

    A missing Authorization header is rejected by the OAuth2 scheme itself,
    so no group or shopping-list code ever runs for an anonymous caller.

    Raises:
        HTTPException: 401 if the token is malformed, expired, or names
            a user that no longer exists
    """
    try:
        payload = decode_token(token)
        subject = payload.get("sub")
        if subject is None:
            raise _unauthorized()
        user_id = int(subject)
    except (JWTError, ValueError, TypeError):
        raise _unauthorized()

    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized()

    return user
