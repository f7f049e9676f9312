from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.utils import deps
from app.schemas.course_completion import CompletionRequest, CompletionResponse, CompletionStatus
from app.schemas.user import CurrentUser
from app.schemas.video_progress import VideoProgress, VideoWatchedRequest, VideoWatchedResponse, VideoUnlockStatus
from app.services.course_progress import CourseProgressService

router = APIRouter()

@router.get("/progress", response_model=List[VideoProgress])
def get_progress_by_query(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int = Query(1, alias="courseId"),
    current_user: CurrentUser = Depends(deps.get_current_user),
    progress_service: CourseProgressService = Depends(deps.get_progress_service)
):
    return progress_service.get_progress(db, user=current_user, course_id=course_id)


@router.get("/progress/{course_id}", response_model=List[VideoProgress])
def get_progress(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    current_user: CurrentUser = Depends(deps.get_current_user),
    progress_service: CourseProgressService = Depends(deps.get_progress_service)
):
    """Progress rows for one course, ordered by video id."""
    return progress_service.get_progress(db, user=current_user, course_id=course_id)


@router.post("/progress", response_model=VideoWatchedResponse)
@router.post("/video-watched", response_model=VideoWatchedResponse)
def mark_video_watched(
    *,
    db: Session = Depends(deps.get_db),
    request: VideoWatchedRequest,
    current_user: CurrentUser = Depends(deps.get_current_user),
    progress_service: CourseProgressService = Depends(deps.get_progress_service)
):
    """Record a watched video and complete the course once every video is watched."""
    return progress_service.record_watched(
        db,
        user=current_user,
        course_id=request.course_id,
        section_id=request.section_id,
        video_id=request.video_id,
    )


@router.get("/completion-status", response_model=CompletionStatus)
def get_completion_by_query(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int = Query(1, alias="courseId"),
    current_user: CurrentUser = Depends(deps.get_current_user),
    progress_service: CourseProgressService = Depends(deps.get_progress_service)
):
    return progress_service.get_completion(db, user=current_user, course_id=course_id)


@router.get("/completion/{course_id}", response_model=CompletionStatus)
def get_completion(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    current_user: CurrentUser = Depends(deps.get_current_user),
    progress_service: CourseProgressService = Depends(deps.get_progress_service)
):
    return progress_service.get_completion(db, user=current_user, course_id=course_id)


@router.post("/completion", response_model=CompletionResponse)
def mark_course_completed(
    *,
    db: Session = Depends(deps.get_db),
    request: CompletionRequest,
    current_user: CurrentUser = Depends(deps.get_current_user),
    progress_service: CourseProgressService = Depends(deps.get_progress_service)
):
    return progress_service.mark_completed(db, user=current_user, course_id=request.course_id)


@router.get("/unlocks/{course_id}", response_model=List[VideoUnlockStatus])
def get_unlock_statuses(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    current_user: CurrentUser = Depends(deps.get_current_user),
    progress_service: CourseProgressService = Depends(deps.get_progress_service)
):
    """Which videos of the course the user may open right now."""
    return progress_service.get_unlock_statuses(db, user=current_user, course_id=course_id)
