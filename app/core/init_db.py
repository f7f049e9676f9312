import logging
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.constants import DEFAULT_USERS
from app.core.database import Base
from app.core.security import get_password_hash
from app.crud.user import user as crud_user

# Import all models so Base.metadata sees every table
from app.models.user import User  # noqa: F401
from app.models.video_progress import VideoProgress  # noqa: F401
from app.models.course_completion import CourseCompletion  # noqa: F401
from app.models.user_settings import UserSettings  # noqa: F401

logger = logging.getLogger(__name__)


def create_tables(engine) -> None:
    Base.metadata.create_all(bind=engine)


def seed_default_users(db: Session) -> None:
    if not settings.SEED_DEFAULT_USERS:
        return
    for account in DEFAULT_USERS:
        if crud_user.get_by_username(db, username=account["username"]):
            continue
        crud_user.create(
            db,
            obj_in={
                "username": account["username"],
                "password": get_password_hash(account["password"]),
                "name": account["name"],
            },
        )
        logger.info(f"Default user {account['username']} created")
