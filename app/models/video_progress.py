from sqlalchemy import Column, Integer, ForeignKey, DateTime, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class VideoProgress(Base):
    __tablename__ = "progress"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", "video_id", name="uq_progress_user_course_video"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(Integer, nullable=False)
    section_id = Column(Integer, nullable=False)
    video_id = Column(Integer, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    watched_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="progress_entries")
