from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import Optional
from datetime import datetime

from app.schemas.level import LevelSummary


class VideoProgressBase(BaseModel):
    course_id: int
    section_id: int
    video_id: int


class VideoProgressCreate(VideoProgressBase):
    user_id: int


class VideoProgressUpdate(BaseModel):
    completed: Optional[bool] = None
    watched_at: Optional[datetime] = None


class VideoProgress(VideoProgressBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    completed: bool
    watched_at: Optional[datetime] = None


class VideoWatchedRequest(BaseModel):
    """Accepts both the camelCase and snake_case field names older clients send."""
    course_id: int = Field(validation_alias=AliasChoices("courseId", "course_id"))
    section_id: int = Field(validation_alias=AliasChoices("sectionId", "section_id"))
    video_id: int = Field(validation_alias=AliasChoices("videoId", "video_id"))


class VideoWatchedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    progress: VideoProgress
    course_completed: bool = Field(alias="courseCompleted")
    completed_at: Optional[datetime] = Field(None, alias="completedAt")
    level: LevelSummary
    leveled_up: bool = Field(alias="leveledUp")


class VideoUnlockStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    video_id: int = Field(alias="videoId")
    section_id: int = Field(alias="sectionId")
    completed: bool
    unlocked: bool
