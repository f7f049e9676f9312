from pydantic import BaseModel, ConfigDict, Field


class LevelSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    level: int
    videos_watched: int = Field(alias="videosWatched")
    current: int
    needed: int
    progress: float
