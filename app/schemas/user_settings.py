from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from app.core.constants import ThemeEnum, DEFAULT_THEME, DEFAULT_NOTIFICATIONS_ENABLED, DEFAULT_EMAIL_NOTIFICATIONS


class UserSettingsUpdate(BaseModel):
    """Partial update; fields left out keep their stored value."""
    model_config = ConfigDict(use_enum_values=True)

    theme: Optional[ThemeEnum] = None
    notifications_enabled: Optional[bool] = None
    email_notifications: Optional[bool] = None


class UserSettings(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    theme: str = DEFAULT_THEME.value
    notifications_enabled: bool = DEFAULT_NOTIFICATIONS_ENABLED
    email_notifications: bool = DEFAULT_EMAIL_NOTIFICATIONS
    updated_at: Optional[datetime] = None
