from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import get_db
from portfolio.core.exceptions import InvalidCredentialsError, NoUpdateFieldsError
from portfolio.core.logging_config import logger, set_user_id
from portfolio.core.rate_limiter import LOGIN_LIMIT, REGISTER_LIMIT, limiter
from portfolio.core.security import create_access_token, verify_password
from portfolio.models.user import User
from portfolio.modules.auth.dependencies import get_current_user
from portfolio.modules.auth.permissions import Actor
from portfolio.repositories.users import UserRepository
from portfolio.schemas.auth import AuthResponse, CurrentUserResponse, UserLogin, UserRegister, VerifyResponse
from portfolio.schemas.common import require_changes
from portfolio.schemas.user import ProfileUpdate, ProfileUpdateResponse, UserResponse

router = APIRouter()


def _issue_token(user: User) -> str:
    role = user.role.value if hasattr(user.role, "value") else str(user.role)
    return create_access_token(user_id=user.user_id, email=user.email, role=role)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(REGISTER_LIMIT)
async def register(
    request: Request,
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """Register a new user; the role is always ``user``"""
    users = UserRepository(db)
    user = await users.register(
        email=user_data.email,
        password=user_data.password,
        full_name=user_data.full_name,
        bio=user_data.bio,
        profile_pic_url=user_data.profile_pic_url,
    )

    logger.log_auth_event(event="register", success=True, email=user.email, account_id=user.user_id)
    return {
        "message": "User registered successfully",
        "user": UserResponse.model_validate(user),
        "token": _issue_token(user),
    }


@router.post("/login", response_model=AuthResponse)
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Login with email and password"""
    users = UserRepository(db)
    user = await users.get_by_email(credentials.email)

    # Same error for unknown email and wrong password
    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.log_auth_event(event="login", success=False, email=credentials.email, reason="invalid credentials")
        raise InvalidCredentialsError()

    user = await users.record_login(user)
    set_user_id(user.user_id)
    logger.log_auth_event(event="login", success=True, email=user.email, account_id=user.user_id)

    return {
        "message": "Login successful",
        "user": UserResponse.model_validate(user),
        "token": _issue_token(user),
    }


@router.get("/verify", response_model=VerifyResponse)
async def verify_token(
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Confirm the bearer token is valid and return its user"""
    user = await UserRepository(db).get_or_404(current_user.id)
    return {"message": "Token is valid", "user": UserResponse.model_validate(user)}


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get current user information"""
    user = await UserRepository(db).get_or_404(current_user.id)
    return {"user": UserResponse.model_validate(user)}


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    payload: ProfileUpdate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Partially update the caller's own profile"""
    changes = require_changes(payload)
    if not current_user.is_admin:
        changes.pop("role", None)
        if not changes:
            raise NoUpdateFieldsError()

    users = UserRepository(db)
    user = await users.get_or_404(current_user.id)
    user = await users.update_profile(user, changes)

    logger.info(f"Profile updated: {user.email} fields={sorted(changes)}")
    return {"message": "Profile updated successfully", "user": UserResponse.model_validate(user)}
