"""Dependency helpers for caller identity and injected clients."""

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_session
from app.models.user import UserProfile
from app.services import users
from app.services.address import AddressClient
from app.services.errors import PermissionDeniedError, RemoteStoreError
from app.services.notifications import EmailNotifier
from app.services.validation import auth_error_message

SIGN_IN_REQUIRED = "Please sign in to continue"


def _sign_in_error(auth_error: Optional[str]) -> PermissionDeniedError:
    message = auth_error_message(auth_error) if auth_error else SIGN_IN_REQUIRED
    return PermissionDeniedError(message, status_code=401)


async def get_caller_id(
    x_user_id: Optional[str] = Header(default=None),
    x_auth_error: Optional[str] = Header(default=None),
) -> str:
    """Return the authenticated id even when no profile exists for it yet.

    The auth proxy forwards the identity provider's error code in
    ``X-Auth-Error`` when sign-in failed.
    """
    if not x_user_id:
        raise _sign_in_error(x_auth_error)
    return x_user_id


async def get_optional_user(
    x_user_id: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> Optional[UserProfile]:
    """Return the caller's profile from the ``X-User-Id`` header, if any.

    The header is set by the authentication proxy in front of the API.
    Ids without a profile are treated as anonymous.
    """
    if not x_user_id:
        return None
    return await users.get_user_profile(session, x_user_id)


async def get_current_user(
    user: Optional[UserProfile] = Depends(get_optional_user),
    x_auth_error: Optional[str] = Header(default=None),
) -> UserProfile:
    if user is None:
        raise _sign_in_error(x_auth_error)
    return user


async def require_admin(user: UserProfile = Depends(get_current_user)) -> UserProfile:
    if not user.is_admin:
        raise PermissionDeniedError("Admin access required")
    return user


def get_notifier() -> EmailNotifier:
    return EmailNotifier(
        host=settings.smtp_host,
        port=settings.smtp_port,
        user=settings.smtp_user,
        password=settings.smtp_password,
        from_addr=settings.smtp_from,
    )


async def get_address_client() -> AsyncGenerator[AddressClient, None]:
    """Yield a Mapbox client built from settings, closed after the request."""
    if not settings.mapbox_token:
        raise RemoteStoreError("Address lookup is not configured")

    client = AddressClient(
        settings.mapbox_token,
        base_url=settings.mapbox_base_url,
        country=settings.address_country,
    )
    try:
        yield client
    finally:
        await client.aclose()
