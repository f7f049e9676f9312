import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from app.core.config import settings

BUNDLED_CATALOG = Path(__file__).with_name("courses.json")


class Resource(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str


class Video(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    url: str
    resources: Tuple[Resource, ...] = ()


class Section(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    videos: Tuple[Video, ...] = ()


class Course(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    icon: Optional[str] = None
    sections: Tuple[Section, ...] = ()

    @property
    def video_count(self) -> int:
        return sum(len(section.videos) for section in self.sections)

    def ordered_videos(self) -> List[Tuple[Section, Video]]:
        """Videos in natural order: section order, then video order within the section."""
        return [(section, video) for section in self.sections for video in section.videos]


class CourseCatalog:
    """Read-only course -> section -> video reference data."""

    def __init__(self, courses: List[Course]):
        self._courses: Tuple[Course, ...] = tuple(courses)
        self._by_id: Dict[int, Course] = {course.id: course for course in self._courses}

    @classmethod
    def from_file(cls, path: Path) -> "CourseCatalog":
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
        return cls([Course.model_validate(item) for item in raw])

    def list_courses(self) -> Tuple[Course, ...]:
        return self._courses

    def get_course(self, course_id: int) -> Optional[Course]:
        return self._by_id.get(course_id)

    def total_videos(self, course_id: int) -> int:
        course = self.get_course(course_id)
        return course.video_count if course else 0

    def ordered_video_ids(self, course_id: int) -> List[int]:
        course = self.get_course(course_id)
        if not course:
            return []
        return [video.id for _, video in course.ordered_videos()]

    def find_video(self, course_id: int, video_id: int) -> Optional[Tuple[Section, Video]]:
        course = self.get_course(course_id)
        if not course:
            return None
        for section, video in course.ordered_videos():
            if video.id == video_id:
                return section, video
        return None


@lru_cache
def load_catalog() -> CourseCatalog:
    path = Path(settings.COURSE_CATALOG_PATH) if settings.COURSE_CATALOG_PATH else BUNDLED_CATALOG
    return CourseCatalog.from_file(path)
