"""User profile and order history service."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import atomic
from app.models.category import utcnow
from app.models.user import Order, UserProfile
from app.schemas.user import UserProfileCreate, UserProfileUpdate
from app.services.errors import NotFoundError
from app.services.notifications import EmailNotifier
from app.services.validation import validate_password, validate_phone_number

logger = logging.getLogger(__name__)


async def get_user_profile(session: AsyncSession, uid: str) -> Optional[UserProfile]:
    async with atomic(session):
        return await session.get(UserProfile, uid)


async def sign_in_user(
    session: AsyncSession, uid: str, data: UserProfileCreate
) -> tuple[UserProfile, bool]:
    """
    Record a sign-in, creating the profile on the user's first visit.

    New profiles get the ``customer`` role. They start ``active`` when the
    identity provider has verified the email, else ``pending_verification``.
    A returning user only gets ``last_login`` bumped; the submitted fields
    are ignored.

    Returns:
        The profile, and whether it was created by this call

    Raises:
        ValidationError: If a phone number is given and is not a valid US number
    """
    phone_number = (
        validate_phone_number(data.phone_number) if data.phone_number else None
    )

    async with atomic(session):
        profile = await session.get(UserProfile, uid)
        created = profile is None
        if created:
            full_name = f"{data.first_name} {data.last_name}".strip()
            profile = UserProfile(
                uid=uid,
                email=data.email,
                first_name=data.first_name,
                last_name=data.last_name,
                display_name=data.display_name or full_name,
                phone_number=phone_number,
                email_verified=data.email_verified,
                role="customer",
                account_status=(
                    "active" if data.email_verified else "pending_verification"
                ),
            )
            session.add(profile)
        profile.last_login = utcnow()

    if created:
        logger.info("Created profile %s (%s)", uid, profile.account_status)
    return profile, created


async def update_user_profile(
    session: AsyncSession, uid: str, updates: UserProfileUpdate
) -> UserProfile:
    """
    Apply profile edits; fields left out of the request are unchanged.

    Raises:
        NotFoundError: If the user has no profile
        ValidationError: If the phone number is not a valid US number
    """
    changes = updates.model_dump(exclude_unset=True, exclude_none=True)
    if "phone_number" in changes:
        changes["phone_number"] = validate_phone_number(changes["phone_number"])

    async with atomic(session):
        profile = await session.get(UserProfile, uid)
        if profile is None:
            raise NotFoundError("User profile not found")
        for key, value in changes.items():
            setattr(profile, key, value)

    logger.info("Updated profile %s: %s", uid, sorted(changes))
    return profile


async def change_password(
    session: AsyncSession,
    uid: str,
    new_password: str,
    notifier: EmailNotifier,
) -> tuple[datetime, bool]:
    """
    Accept a password change and email the account owner about it.

    The identity provider stores the credential; this records when it
    changed. A failed notification email does not fail the change.

    Returns:
        When the change was recorded, and whether the email went out

    Raises:
        ValidationError: If the password breaks the password rules
        NotFoundError: If the user has no profile
    """
    validate_password(new_password)

    async with atomic(session):
        profile = await session.get(UserProfile, uid)
        if profile is None:
            raise NotFoundError("User profile not found")
        changed_at = utcnow()
        profile.password_changed_at = changed_at

    logger.info("Password changed for %s", uid)
    sent = await notifier.send_password_change_notification(profile.email, changed_at)
    return changed_at, sent


async def get_user_orders(session: AsyncSession, uid: str) -> list[Order]:
    """Get a user's past orders, newest first."""
    async with atomic(session):
        result = await session.execute(
            select(Order).where(Order.user_id == uid).order_by(Order.order_date.desc())
        )
        return list(result.scalars().all())
