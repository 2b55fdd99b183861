"""Account API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..core.logging import get_logger
from ..core.models import User
from ..core.repositories import UserRepository
from ..core.schemas.accounts import (
    LoginRequest,
    PasswordChangeRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from ..core.services import UserAccountService
from ..database import get_db_session
from ..middleware.auth import get_current_user
from ..security import create_access_token, needs_update, verify_password

router = APIRouter(prefix="/accounts", tags=["accounts"])
logger = get_logger("accounts")


async def _to_response(service: UserAccountService, user: User) -> UserResponse:
    roles = await service.roles_for_user(user)
    return UserResponse(
        id=user.id,
        username=user.username,
        display_name=user.display_name,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        enabled=user.enabled,
        roles=[role.role_name for role in roles],
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post("/", response_model=UserResponse, status_code=201)
async def register(request: RegisterRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new account; it stays disabled until activated when e-mail checks are on."""
    settings = get_settings()
    service = UserAccountService(session)

    role = await service.find_or_create_role(request.role)
    user = User(
        username=request.username,
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    check_email = settings.check_email_on_registration
    user = await service.add_user(
        user, role, enabled=not check_email, check_email_account=check_email
    )
    if user.has_errors():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=user.errors)
    if check_email:
        # stands in for the confirmation mail
        activation_key = await service.find_activation_key_for_user(user)
        logger.info(
            f"Activation key for '{user.username}' <{user.email}>: {activation_key.activation_key}",
            extra={"user_id": str(user.id), "activation_key": activation_key.activation_key},
        )
    return await _to_response(service, user)


@router.post("/activate/{key}", response_model=UserResponse)
async def activate(key: str, session: AsyncSession = Depends(get_db_session)):
    """Enable the account bound to an activation key."""
    service = UserAccountService(session)
    activation_key = await service.find_activation_key(key)
    if activation_key is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown activation key")
    user = await service.enable_user_with_activation_key(activation_key.user, activation_key)
    return await _to_response(service, user)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Exchange credentials of an enabled account for an access token."""
    settings = get_settings()
    user = await UserRepository(session).get_by_username(request.username)
    if user is None or not user.enabled or not verify_password(request.password, user.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if needs_update(user.password):
        await UserAccountService(session).update_password_for_user(request.password, user)

    token = create_access_token(data={"sub": str(user.id)})
    return TokenResponse(access_token=token, expires_in=settings.access_token_expire_minutes * 60)


@router.get("/me", response_model=UserResponse)
async def me(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """Current account."""
    return await _to_response(UserAccountService(session), current_user)


@router.put("/me/password", status_code=204)
async def change_password(
    request: PasswordChangeRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """Change the current account's password."""
    if not verify_password(request.current_password, current_user.password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Wrong password")
    service = UserAccountService(session)
    user = await service.update_password_for_user(request.new_password, current_user)
    if user.has_errors():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=user.errors)
