from typing import List
from fastapi import APIRouter, Depends, Query

from app.core.catalog import Course, CourseCatalog
from app.core.exceptions import NotFound
from app.schemas.course import CourseListItem
from app.utils import deps

router = APIRouter()

@router.get("/courses", response_model=List[CourseListItem])
def list_courses(catalog: CourseCatalog = Depends(deps.get_catalog)):
    return [
        CourseListItem(id=course.id, name=course.name, icon=course.icon, video_count=course.video_count)
        for course in catalog.list_courses()
    ]

@router.get("/course", response_model=Course)
def get_course(course_id: int = Query(1, alias="courseId"), catalog: CourseCatalog = Depends(deps.get_catalog)):
    course = catalog.get_course(course_id)
    if not course:
        raise NotFound("Course not found")
    return course
