"""Gamified level derived from a user's total number of watched videos.

Advancing from level L to L+1 takes L+1 more videos, so the cumulative
thresholds run 0, 2, 5, 9, 14, 20, ...
"""
from typing import Tuple

from app.schemas.level import LevelSummary


def _locate(videos_watched: int) -> Tuple[int, int, int]:
    """Return (level, threshold of that level, videos the level requires)."""
    videos_watched = max(0, videos_watched)
    level = 1
    cumulative = 0
    increment = 2
    while cumulative + increment <= videos_watched:
        cumulative += increment
        increment += 1
        level += 1
    return level, cumulative, increment


def level_threshold(level: int) -> int:
    """Cumulative videos needed to reach ``level``."""
    level = max(1, level)
    return sum(range(2, level + 1))


def calculate_level(videos_watched: int) -> int:
    level, _, _ = _locate(videos_watched)
    return level


def progress_to_next_level(videos_watched: int) -> LevelSummary:
    videos_watched = max(0, videos_watched)
    level, threshold, needed = _locate(videos_watched)
    current = videos_watched - threshold
    progress = min(max(current / needed * 100, 0.0), 100.0)
    return LevelSummary(
        level=level,
        videos_watched=videos_watched,
        current=current,
        needed=needed,
        progress=progress,
    )
