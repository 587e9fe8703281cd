from sqlalchemy.ext.asyncio import AsyncSession

from admin_service.services.admin_accounts import get_admin_by_email
from admin_service.services.response_builders import (
    invalid_credentials_response,
)
from shared.core.exceptions import ForbiddenError
from shared.core.logging_config import get_logger
from shared.db.models import Admin
from shared.utils.auth import ROLE_ADMIN, create_jwt_token, verify_password
from shared.utils.timezone_utils import utc_now

logger = get_logger(__name__)


async def authenticate_admin(
    db: AsyncSession, email: str, password: str
) -> Admin:
    """
    Check admin credentials and stamp ``last_login``.

    Unknown email and wrong password produce the same 401.
    """
    admin = await get_admin_by_email(db, email)
    if admin is None or not verify_password(password, admin.password_hash):
        logger.warning("Failed admin login for %s", email.lower())
        invalid_credentials_response()

    if not admin.is_active:
        raise ForbiddenError("Admin account is inactive")

    admin.last_login = utc_now()
    await db.commit()
    return admin


def issue_admin_token(admin: Admin) -> str:
    return create_jwt_token(
        {"uid": admin.id, "role": ROLE_ADMIN, "email": admin.email}
    )
