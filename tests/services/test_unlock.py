from types import SimpleNamespace

from app.services.unlock import completed_video_ids, is_video_unlocked, unlock_statuses

ORDERED = [1, 2, 5, 3, 4]


def _entry(video_id: int, completed: bool = True):
    return SimpleNamespace(video_id=video_id, completed=completed)

def test_first_video_is_always_unlocked():
    assert is_video_unlocked(ORDERED, set(), 1) is True

def test_video_locked_until_predecessor_completed():
    assert is_video_unlocked(ORDERED, set(), 2) is False
    assert is_video_unlocked(ORDERED, {1}, 2) is True

def test_order_follows_catalog_not_video_id():
    # video 5 sits between 2 and 3 in the catalog
    assert is_video_unlocked(ORDERED, {1, 2}, 5) is True
    assert is_video_unlocked(ORDERED, {1, 2}, 3) is False
    assert is_video_unlocked(ORDERED, {1, 2, 5}, 3) is True

def test_completed_video_stays_unlocked():
    # watched out of order: predecessor 2 never completed
    assert is_video_unlocked(ORDERED, {5}, 5) is True

def test_unknown_video_is_locked():
    assert is_video_unlocked(ORDERED, {1, 2, 3, 4, 5}, 99) is False

def test_incomplete_entries_do_not_unlock():
    completed = completed_video_ids([_entry(1, completed=False), _entry(2)])
    assert completed == {2}

def test_unlock_statuses_for_course(small_catalog):
    course = small_catalog.get_course(1)
    statuses = unlock_statuses(course, [_entry(1), _entry(2)])
    assert [(s.video_id, s.section_id, s.completed, s.unlocked) for s in statuses] == [
        (1, 1, True, True),
        (2, 1, True, True),
        (3, 2, False, True),
        (4, 2, False, False),
    ]
