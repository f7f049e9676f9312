import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.catalog import Course, CourseCatalog
from app.core.exceptions import NotFound, PersistenceUnavailable
from app.crud.course_completion import course_completion as crud_completion
from app.crud.video_progress import video_progress as crud_video_progress
from app.schemas.course_completion import CompletionStatus, CompletionResponse
from app.schemas.level import LevelSummary
from app.schemas.user import CurrentUser
from app.schemas.video_progress import VideoProgress, VideoWatchedResponse, VideoUnlockStatus
from app.services.level import calculate_level, progress_to_next_level
from app.services.unlock import unlock_statuses

logger = logging.getLogger(__name__)


class CourseProgressService:
    """Progress ledger: watched videos, course completion and level, per user."""

    def __init__(self, catalog: CourseCatalog):
        self.catalog = catalog

    def _get_or_raise_course(self, course_id: int) -> Course:
        course = self.catalog.get_course(course_id)
        if not course:
            raise NotFound("Course not found")
        return course

    def _require_persistent(self, user: CurrentUser) -> None:
        if user.ephemeral:
            raise PersistenceUnavailable("Progress cannot be saved for a temporary session. Please log in again.")

    def record_watched(
        self, db: Session, *, user: CurrentUser, course_id: int, section_id: int, video_id: int
    ) -> VideoWatchedResponse:
        course = self._get_or_raise_course(course_id)
        located = self.catalog.find_video(course_id, video_id)
        if not located or located[0].id != section_id:
            raise NotFound("Video not found in this course section")
        self._require_persistent(user)

        videos_before = crud_video_progress.count_completed_for_user(db, user_id=user.id)

        entry = crud_video_progress.mark_watched(
            db, user_id=user.id, course_id=course_id, section_id=section_id, video_id=video_id
        )

        catalog_ids = self.catalog.ordered_video_ids(course_id)
        completed_count = crud_video_progress.count_completed(
            db, user_id=user.id, course_id=course_id, video_ids=catalog_ids
        )
        completion = None
        if completed_count == course.video_count:
            completion, created = crud_completion.create_if_absent(db, user_id=user.id, course_id=course_id)
            if created:
                logger.info(f"User {user.id} completed course {course_id}")
        else:
            completion = crud_completion.get_by_user_and_course(db, user_id=user.id, course_id=course_id)

        videos_after = crud_video_progress.count_completed_for_user(db, user_id=user.id)
        leveled_up = calculate_level(videos_after) > calculate_level(videos_before)
        if leveled_up:
            logger.info(f"User {user.id} reached level {calculate_level(videos_after)}")

        return VideoWatchedResponse(
            progress=VideoProgress.model_validate(entry),
            course_completed=completion is not None,
            completed_at=completion.completed_at if completion else None,
            level=progress_to_next_level(videos_after),
            leveled_up=leveled_up,
        )

    def get_progress(self, db: Session, *, user: CurrentUser, course_id: int) -> List[VideoProgress]:
        self._get_or_raise_course(course_id)
        if user.ephemeral:
            return []
        entries = crud_video_progress.get_all_by_user_and_course(db, user_id=user.id, course_id=course_id)
        return [VideoProgress.model_validate(entry) for entry in entries]

    def get_completion(self, db: Session, *, user: CurrentUser, course_id: int) -> CompletionStatus:
        self._get_or_raise_course(course_id)
        if user.ephemeral:
            return CompletionStatus(completed=False)
        completion = crud_completion.get_by_user_and_course(db, user_id=user.id, course_id=course_id)
        return CompletionStatus(
            completed=completion is not None,
            completed_at=completion.completed_at if completion else None,
        )

    def mark_completed(self, db: Session, *, user: CurrentUser, course_id: int) -> CompletionResponse:
        self._get_or_raise_course(course_id)
        self._require_persistent(user)
        completion, created = crud_completion.create_if_absent(db, user_id=user.id, course_id=course_id)
        if created:
            logger.info(f"User {user.id} marked course {course_id} as completed")
        return CompletionResponse(completed_at=completion.completed_at)

    def get_level(self, db: Session, *, user: CurrentUser) -> LevelSummary:
        if user.ephemeral:
            return progress_to_next_level(0)
        total = crud_video_progress.count_completed_for_user(db, user_id=user.id)
        return progress_to_next_level(total)

    def get_unlock_statuses(self, db: Session, *, user: CurrentUser, course_id: int) -> List[VideoUnlockStatus]:
        course = self._get_or_raise_course(course_id)
        entries = [] if user.ephemeral else crud_video_progress.get_all_by_user_and_course(
            db, user_id=user.id, course_id=course_id
        )
        return unlock_statuses(course, entries)
