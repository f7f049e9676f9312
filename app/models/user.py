from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=True)
    password = Column(String, nullable=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    discord_id = Column(String, unique=True, index=True, nullable=True)
    avatar_url = Column(String, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    last_login = Column(DateTime(timezone=True), nullable=True)

    progress_entries = relationship("VideoProgress", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    completions = relationship("CourseCompletion", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    settings = relationship("UserSettings", back_populates="user", uselist=False, cascade="all, delete-orphan", passive_deletes=True)
