from sqlalchemy.orm import Session

from agrogestion.core.config import settings
from agrogestion.crud.user import create_user, get_user_by_email
from agrogestion.models.user import User, UserRole
from agrogestion.schemas.user import UserCreate
from agrogestion.utils.logger import logger


def create_default_admin(db: Session) -> User:
    # crear admin si no existe
    admin = get_user_by_email(db, settings.admin_email)
    if admin:
        return admin

    admin = create_user(
        db,
        UserCreate(
            email=settings.admin_email,
            password=settings.admin_password,
            name=settings.admin_name,
            role=UserRole.admin,
        ),
    )
    logger.info("Admin created: %s", admin.email)
    return admin
