from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.constants import DEFAULT_THEME, DEFAULT_NOTIFICATIONS_ENABLED, DEFAULT_EMAIL_NOTIFICATIONS


class UserSettings(Base):
    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    theme = Column(String, default=DEFAULT_THEME.value, nullable=False)
    notifications_enabled = Column(Boolean, default=DEFAULT_NOTIFICATIONS_ENABLED, nullable=False)
    email_notifications = Column(Boolean, default=DEFAULT_EMAIL_NOTIFICATIONS, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="settings")
