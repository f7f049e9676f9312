from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class CourseCompletion(Base):
    __tablename__ = "completions"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_completions_user_course"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(Integer, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="completions")
