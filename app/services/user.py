import logging
from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, PersistenceUnavailable
from app.crud.user import user as crud_user
from app.crud.user_settings import user_settings as crud_user_settings
from app.schemas.user import CurrentUser, UserProfile
from app.schemas.user_settings import UserSettings, UserSettingsUpdate

logger = logging.getLogger(__name__)


class UserService:
    def get_profile(self, db: Session, *, current_user: CurrentUser) -> UserProfile:
        if current_user.ephemeral:
            return UserProfile.model_validate(current_user.model_dump())
        user = crud_user.get(db, id=current_user.id)
        if not user:
            raise NotFound("User not found")
        return UserProfile.model_validate(user)

    def get_settings(self, db: Session, *, current_user: CurrentUser) -> UserSettings:
        """Missing rows read as the default settings."""
        if current_user.ephemeral:
            return UserSettings()
        settings_row = crud_user_settings.get_by_user(db, user_id=current_user.id)
        if not settings_row:
            return UserSettings()
        return UserSettings.model_validate(settings_row)

    def save_settings(self, db: Session, *, current_user: CurrentUser, settings_in: UserSettingsUpdate) -> UserSettings:
        if current_user.ephemeral:
            raise PersistenceUnavailable("Settings cannot be saved for a temporary session. Please log in again.")
        settings_row = crud_user_settings.save_for_user(db, user_id=current_user.id, obj_in=settings_in)
        logger.info(f"Settings updated for user {current_user.id}")
        return UserSettings.model_validate(settings_row)


user_service = UserService()
