"""Sequential unlock rules, always recomputed from progress rows."""
from typing import Iterable, List, Sequence, Set

from app.core.catalog import Course
from app.schemas.video_progress import VideoUnlockStatus


def completed_video_ids(progress_entries: Iterable) -> Set[int]:
    return {entry.video_id for entry in progress_entries if entry.completed}


def is_video_unlocked(ordered_video_ids: Sequence[int], completed_ids: Set[int], video_id: int) -> bool:
    """The first video is open, a completed video stays open, anything else needs its predecessor watched."""
    if video_id not in ordered_video_ids:
        return False
    if video_id in completed_ids:
        return True
    position = ordered_video_ids.index(video_id)
    if position == 0:
        return True
    return ordered_video_ids[position - 1] in completed_ids


def unlock_statuses(course: Course, progress_entries: Iterable) -> List[VideoUnlockStatus]:
    completed_ids = completed_video_ids(progress_entries)
    ordered = course.ordered_videos()
    ordered_ids = [video.id for _, video in ordered]
    return [
        VideoUnlockStatus(
            video_id=video.id,
            section_id=section.id,
            completed=video.id in completed_ids,
            unlocked=is_video_unlocked(ordered_ids, completed_ids, video.id),
        )
        for section, video in ordered
    ]
