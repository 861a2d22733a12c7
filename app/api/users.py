"""Profile, password and order history endpoints for the signed-in user."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_caller_id, get_current_user, get_notifier
from app.database import get_session
from app.models.user import UserProfile
from app.schemas.user import (
    OrderResponse,
    PasswordChange,
    PasswordChangeResponse,
    UserProfileCreate,
    UserProfileResponse,
    UserProfileUpdate,
)
from app.services import users
from app.services.notifications import EmailNotifier

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "/me", response_model=UserProfileResponse, status_code=status.HTTP_201_CREATED
)
async def sign_in(
    request: UserProfileCreate,
    response: Response,
    uid: str = Depends(get_caller_id),
    session: AsyncSession = Depends(get_session),
) -> UserProfileResponse:
    """
    Create the caller's profile on first sign-in.

    Returns 201 with the new profile, or 200 with the existing one.
    """
    profile, created = await users.sign_in_user(session, uid, request)
    if not created:
        response.status_code = status.HTTP_200_OK
    return UserProfileResponse.model_validate(profile)


@router.get("/me", response_model=UserProfileResponse)
async def read_profile(user: UserProfile = Depends(get_current_user)) -> UserProfileResponse:
    return UserProfileResponse.model_validate(user)


@router.patch("/me", response_model=UserProfileResponse)
async def update_profile(
    request: UserProfileUpdate,
    user: UserProfile = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> UserProfileResponse:
    profile = await users.update_user_profile(session, user.uid, request)
    return UserProfileResponse.model_validate(profile)


@router.put("/me/password", response_model=PasswordChangeResponse)
async def change_password(
    request: PasswordChange,
    user: UserProfile = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    notifier: EmailNotifier = Depends(get_notifier),
) -> PasswordChangeResponse:
    changed_at, sent = await users.change_password(
        session, user.uid, request.new_password, notifier
    )
    return PasswordChangeResponse(changed_at=changed_at, notification_sent=sent)


@router.get("/me/orders", response_model=list[OrderResponse])
async def read_orders(
    user: UserProfile = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[OrderResponse]:
    orders = await users.get_user_orders(session, user.uid)
    return [OrderResponse.model_validate(o) for o in orders]
