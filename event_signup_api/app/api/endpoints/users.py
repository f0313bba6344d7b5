"""
Account endpoints: signup and login.

Login answers an unknown e-mail and a wrong password with the same 401
message, so the endpoint cannot be used to probe for accounts.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from event_signup_api.app.api.deps import get_db, get_hasher, get_token_manager
from event_signup_api.app.core.db import Database
from event_signup_api.app.core.errors import AuthError, EventApiError
from event_signup_api.app.core.security import PasswordHasher, TokenManager
from event_signup_api.app.schemas.common import MessageResponse
from event_signup_api.app.schemas.user import LoginResponse, UserCreate, UserLogin
from event_signup_api.app.services.user_service import UserService


router = APIRouter()

LOGIN_FAILED = "Could not authenticate user."


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user: UserCreate,
    db: Database = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
) -> MessageResponse:
    """Register a new account.  The password is stored as a bcrypt hash."""
    try:
        UserService.create_user(db, hasher, user)
    except EventApiError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not save user.")
    return MessageResponse(message="User created successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    user: UserLogin,
    db: Database = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenManager = Depends(get_token_manager),
) -> LoginResponse:
    """Check the credentials and return an access token valid for two hours."""
    try:
        user_id = UserService.validate_credentials(db, hasher, user)
    except AuthError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=LOGIN_FAILED)
    except EventApiError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=LOGIN_FAILED)
    try:
        token = tokens.issue(user.email, user_id)
    except EventApiError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=LOGIN_FAILED)
    return LoginResponse(message="Login successful!", token=token)
