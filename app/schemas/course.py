from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class CourseListItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    icon: Optional[str] = None
    video_count: int = Field(alias="videoCount")
