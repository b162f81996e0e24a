"""Authentication endpoints: the identity provider the group API trusts."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import select
from sqlalchemy.orm import Session

from groupcart.api.deps import get_current_user
from groupcart.core.security import hash_password, verify_password, create_access_token
from groupcart.database import get_db
from groupcart.models.user import User
from groupcart.schemas.user import UserCreate, UserResponse, Token

logger = logging.getLogger(__name__)

router = APIRouter()


def _issue_token(user: User) -> dict:
    # "sub" must be a string for JWT
    access_token = create_access_token(data={"sub": str(user.id), "email": user.email})
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new user account and log them in.

    Raises:
        HTTPException: 400 if the email is taken or the password is too long
    """
    existing_user = db.execute(
        select(User.id).where(User.email == user_data.email)
    ).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    try:
        hashed = hash_password(user_data.password)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    new_user = User(email=user_data.email, name=user_data.name, hashed_password=hashed)
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info("Registered user %s", new_user.id)
    return _issue_token(new_user)


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """Exchange email (sent as the OAuth2 "username") and password for a token."""
    user = db.execute(
        select(User).where(User.email == form_data.username)
    ).scalar_one_or_none()

    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _issue_token(user)


@router.get("/me", response_model=UserResponse)
def read_current_user(current_user: User = Depends(get_current_user)):
    """Return the authenticated user."""
    return current_user
