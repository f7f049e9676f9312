from datetime import datetime, timezone
from typing import Optional, Tuple
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.course_completion import CourseCompletion
from app.schemas.course_completion import CourseCompletionCreate

class CRUDCourseCompletion(CRUDBase[CourseCompletion, CourseCompletionCreate, CourseCompletionCreate]):

    def get_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> Optional[CourseCompletion]:
        return self.get_by(db, user_id=user_id, course_id=course_id)

    def create_if_absent(
        self, db: Session, *, user_id: int, course_id: int, commit: bool = True
    ) -> Tuple[CourseCompletion, bool]:
        return self.insert_if_absent(
            db,
            values={
                "user_id": user_id,
                "course_id": course_id,
                "completed_at": datetime.now(timezone.utc),
            },
            conflict_fields=("user_id", "course_id"),
            commit=commit,
        )


course_completion = CRUDCourseCompletion(CourseCompletion)
