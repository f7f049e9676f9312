from typing import Optional
from sqlalchemy.orm import Session

from app.core.constants import DEFAULT_THEME, DEFAULT_NOTIFICATIONS_ENABLED, DEFAULT_EMAIL_NOTIFICATIONS
from app.crud.base import CRUDBase
from app.models.user_settings import UserSettings
from app.schemas.user_settings import UserSettingsUpdate

class CRUDUserSettings(CRUDBase[UserSettings, UserSettingsUpdate, UserSettingsUpdate]):

    def get_by_user(self, db: Session, *, user_id: int) -> Optional[UserSettings]:
        return self.get_by(db, user_id=user_id)

    def ensure_for_user(self, db: Session, *, user_id: int, commit: bool = True) -> UserSettings:
        settings_row, _ = self.insert_if_absent(
            db,
            values={
                "user_id": user_id,
                "theme": DEFAULT_THEME.value,
                "notifications_enabled": DEFAULT_NOTIFICATIONS_ENABLED,
                "email_notifications": DEFAULT_EMAIL_NOTIFICATIONS,
            },
            conflict_fields=("user_id",),
            commit=commit,
        )
        return settings_row

    def save_for_user(self, db: Session, *, user_id: int, obj_in: UserSettingsUpdate) -> UserSettings:
        settings_row = self.ensure_for_user(db, user_id=user_id, commit=False)
        # explicit nulls keep the stored value
        return self.update(db, db_obj=settings_row, obj_in=obj_in.model_dump(exclude_unset=True, exclude_none=True))


user_settings = CRUDUserSettings(UserSettings)
