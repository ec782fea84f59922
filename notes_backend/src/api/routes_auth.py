import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from notes_database.repository import UserRepository

from .dependencies import get_db
from .errors import ConflictError, NotFoundError, UnauthorizedError
from .schemas import AuthResponse, ProfileResponse, UserCreate, UserLogin
from .security import CurrentUser, create_access_token, get_current_user, get_password_hash, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


# PUBLIC_INTERFACE
@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(user: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new user.
    Returns the newly created user record (excluding password) and a token.
    """
    users = UserRepository(db)
    if users.find_by_email(user.email):
        raise ConflictError("Email already registered")
    if users.find_by_username(user.username):
        raise ConflictError("Username already taken")
    user_obj = users.create(
        username=user.username,
        email=user.email,
        hashed_password=get_password_hash(user.password),
    )
    return {
        "message": "User registered successfully",
        "user": user_obj,
        "token": create_access_token(user_obj.id, user_obj.username),
    }

# PUBLIC_INTERFACE
@router.post("/login", response_model=AuthResponse, summary="Login with email and password")
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """
    User login.
    Returns the user and a JWT on success.
    """
    user = UserRepository(db).find_by_email(credentials.email)
    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.info("Failed login attempt")
        raise UnauthorizedError("Invalid email or password")
    return {
        "message": "Login successful",
        "user": user,
        "token": create_access_token(user.id, user.username),
    }

# PUBLIC_INTERFACE
@router.get("/profile", response_model=ProfileResponse, summary="Get current user profile")
def get_profile(current_user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Get details about the current authed user.
    """
    user = UserRepository(db).find_by_id(current_user.id)
    if user is None:
        raise NotFoundError("User not found")
    return {"user": user}
