from datetime import datetime, timezone
from typing import Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.video_progress import VideoProgress
from app.schemas.video_progress import VideoProgressCreate, VideoProgressUpdate

class CRUDVideoProgress(CRUDBase[VideoProgress, VideoProgressCreate, VideoProgressUpdate]):

    def mark_watched(
        self, db: Session, *, user_id: int, course_id: int, section_id: int, video_id: int, commit: bool = True
    ) -> VideoProgress:
        return self.upsert(
            db,
            values={
                "user_id": user_id,
                "course_id": course_id,
                "section_id": section_id,
                "video_id": video_id,
                "completed": True,
                "watched_at": datetime.now(timezone.utc),
            },
            conflict_fields=("user_id", "course_id", "video_id"),
            update_fields=("completed", "watched_at"),
            commit=commit,
        )

    def get_all_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> List[VideoProgress]:
        return (
            db.query(VideoProgress)
            .filter(VideoProgress.user_id == user_id)
            .filter(VideoProgress.course_id == course_id)
            .order_by(VideoProgress.video_id.asc())
            .all()
        )

    def count_completed(
        self, db: Session, *, user_id: int, course_id: int, video_ids: Optional[Iterable[int]] = None
    ) -> int:
        query = (
            db.query(func.count(VideoProgress.id))
            .filter(VideoProgress.user_id == user_id)
            .filter(VideoProgress.course_id == course_id)
            .filter(VideoProgress.completed == True)
        )
        if video_ids is not None:
            query = query.filter(VideoProgress.video_id.in_(list(video_ids)))
        return query.scalar() or 0

    def count_completed_for_user(self, db: Session, *, user_id: int) -> int:
        return (
            db.query(func.count(VideoProgress.id))
            .filter(VideoProgress.user_id == user_id)
            .filter(VideoProgress.completed == True)
            .scalar()
        ) or 0


video_progress = CRUDVideoProgress(VideoProgress)
