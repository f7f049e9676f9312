from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import Optional
from datetime import datetime


class CourseCompletionCreate(BaseModel):
    user_id: int
    course_id: int


class CompletionStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    completed: bool
    completed_at: Optional[datetime] = Field(None, alias="completedAt")


class CompletionRequest(BaseModel):
    course_id: int = Field(validation_alias=AliasChoices("courseId", "course_id"))


class CompletionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    completed_at: Optional[datetime] = Field(None, alias="completedAt")
