"""
Administrator accounts: lookup, CRUD and the startup seed.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from admin_service.schemas.admin_user import (
    AdminCreateRequest,
    AdminUpdateRequest,
)
from admin_service.services.response_builders import (
    admin_email_taken_response,
    admin_not_found_response,
)
from shared.core.config import Settings, settings
from shared.core.logging_config import get_logger
from shared.db.models import Admin
from shared.utils.auth import hash_password

logger = get_logger(__name__)


async def get_admin_by_email(db: AsyncSession, email: str) -> Optional[Admin]:
    result = await db.execute(Admin.by_email_query(email))
    return result.scalar_one_or_none()


async def get_admin_or_404(db: AsyncSession, admin_id: str) -> Admin:
    admin = await db.get(Admin, admin_id)
    if admin is None:
        admin_not_found_response()
    return admin


async def list_admins(db: AsyncSession) -> List[Admin]:
    result = await db.execute(select(Admin).order_by(Admin.created_at.desc()))
    return list(result.scalars().all())


async def create_admin(db: AsyncSession, payload: AdminCreateRequest) -> Admin:
    email = payload.email.lower()
    if await get_admin_by_email(db, email):
        admin_email_taken_response(email)

    admin = Admin(
        email=email,
        name=payload.name,
        password_hash=hash_password(payload.password),
    )
    db.add(admin)
    try:
        await db.commit()
    except IntegrityError:
        # Created concurrently after the lookup
        await db.rollback()
        admin_email_taken_response(email)
    logger.info("Admin %s created", admin.id)
    return admin


async def update_admin(
    db: AsyncSession, admin_id: str, payload: AdminUpdateRequest
) -> Admin:
    admin = await get_admin_or_404(db, admin_id)
    changes = payload.model_dump(exclude_unset=True)

    new_email = changes.pop("email", None)
    if new_email and new_email.lower() != admin.email:
        if await get_admin_by_email(db, new_email):
            admin_email_taken_response(new_email.lower())
        admin.email = new_email.lower()

    new_password = changes.pop("password", None)
    if new_password:
        admin.password_hash = hash_password(new_password)

    for field, value in changes.items():
        if value is not None:
            setattr(admin, field, value)

    await db.commit()
    return admin


async def delete_admin(db: AsyncSession, admin_id: str) -> None:
    admin = await get_admin_or_404(db, admin_id)
    await db.delete(admin)
    await db.commit()
    logger.info("Admin %s deleted", admin_id)


async def seed_default_admin(
    db: AsyncSession, app_settings: Settings = settings
) -> Optional[Admin]:
    """
    Create the configured default admin unless it already exists.

    Returns:
        The new admin, or None when nothing was created.
    """
    email = app_settings.DEFAULT_ADMIN_EMAIL.lower()
    if not email or not app_settings.DEFAULT_ADMIN_PASSWORD:
        logger.warning("Default admin credentials not configured; skipping seed")
        return None

    if await get_admin_by_email(db, email):
        logger.info("Default admin %s already present", email)
        return None

    admin = Admin(
        email=email,
        name=app_settings.DEFAULT_ADMIN_NAME,
        password_hash=hash_password(app_settings.DEFAULT_ADMIN_PASSWORD),
    )
    db.add(admin)
    await db.commit()
    logger.info("Default admin %s created", email)
    return admin
