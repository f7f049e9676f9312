import pytest

from app.services.level import calculate_level, level_threshold, progress_to_next_level


@pytest.mark.parametrize("videos_watched, expected_level", [
    (0, 1),
    (1, 1),
    (2, 2),
    (4, 2),
    (5, 3),
    (8, 3),
    (9, 4),
    (14, 5),
    (20, 6),
])
def test_calculate_level_thresholds(videos_watched: int, expected_level: int):
    assert calculate_level(videos_watched) == expected_level

def test_level_threshold_sequence():
    assert [level_threshold(level) for level in range(1, 7)] == [0, 2, 5, 9, 14, 20]

def test_calculate_level_is_monotonic():
    levels = [calculate_level(n) for n in range(200)]
    assert levels == sorted(levels)

def test_negative_input_is_treated_as_zero():
    assert calculate_level(-3) == 1
    summary = progress_to_next_level(-3)
    assert summary.videos_watched == 0
    assert summary.progress == 0

def test_progress_halfway_through_first_level():
    summary = progress_to_next_level(1)
    assert summary.level == 1
    assert summary.current == 1
    assert summary.needed == 2
    assert summary.progress == 50.0

def test_progress_resets_on_level_up():
    summary = progress_to_next_level(2)
    assert summary.level == 2
    assert summary.current == 0
    assert summary.needed == 3
    assert summary.progress == 0.0

@pytest.mark.parametrize("videos_watched", range(0, 60))
def test_progress_stays_within_bounds(videos_watched: int):
    summary = progress_to_next_level(videos_watched)
    assert 0 <= summary.progress < 100
    assert summary.level == calculate_level(videos_watched)
    assert summary.current + level_threshold(summary.level) == videos_watched

def test_level_summary_serializes_camel_case():
    body = progress_to_next_level(6).model_dump(by_alias=True)
    assert body["videosWatched"] == 6
    assert body["level"] == 3
