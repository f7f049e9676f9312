from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.utils import deps
from app.schemas.level import LevelSummary
from app.schemas.user import CurrentUser, UserProfile
from app.schemas.user_settings import UserSettings, UserSettingsUpdate
from app.services.course_progress import CourseProgressService
from app.services.user import user_service

router = APIRouter()

@router.get("/user", response_model=UserProfile)
def read_users_me(
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    return user_service.get_profile(db, current_user=current_user)

@router.get("/user/settings", response_model=UserSettings)
def read_user_settings(
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    return user_service.get_settings(db, current_user=current_user)

@router.post("/user/settings", response_model=UserSettings)
def update_user_settings(
    *,
    db: Session = Depends(deps.get_db),
    settings_in: UserSettingsUpdate,
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    return user_service.save_settings(db, current_user=current_user, settings_in=settings_in)

@router.get("/user/level", response_model=LevelSummary)
def read_user_level(
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user),
    progress_service: CourseProgressService = Depends(deps.get_progress_service)
):
    """Level over every watched video across all courses."""
    return progress_service.get_level(db, user=current_user)
