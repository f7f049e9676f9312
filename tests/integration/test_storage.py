from sqlalchemy.orm import Session

from app.core.init_db import seed_default_users
from app.core.security import verify_password
from app.crud.course_completion import course_completion as crud_completion
from app.crud.user import user as crud_user
from app.crud.user_settings import user_settings as crud_user_settings
from app.crud.video_progress import video_progress as crud_video_progress
from app.core.config import settings


def test_mark_watched_upserts_single_row(db_session: Session, staff_user):
    first = crud_video_progress.mark_watched(db_session, user_id=staff_user.id, course_id=1, section_id=1, video_id=1)
    second = crud_video_progress.mark_watched(db_session, user_id=staff_user.id, course_id=1, section_id=1, video_id=1)
    assert first.id == second.id
    assert second.completed is True
    assert crud_video_progress.count_completed_for_user(db_session, user_id=staff_user.id) == 1

def test_count_completed_limited_to_catalog_ids(db_session: Session, staff_user):
    for video_id in (1, 2, 77):
        crud_video_progress.mark_watched(db_session, user_id=staff_user.id, course_id=1, section_id=1, video_id=video_id)
    assert crud_video_progress.count_completed(db_session, user_id=staff_user.id, course_id=1) == 3
    assert crud_video_progress.count_completed(db_session, user_id=staff_user.id, course_id=1, video_ids=[1, 2, 3]) == 2

def test_completion_insert_if_absent(db_session: Session, staff_user):
    row, created = crud_completion.create_if_absent(db_session, user_id=staff_user.id, course_id=1)
    again, created_again = crud_completion.create_if_absent(db_session, user_id=staff_user.id, course_id=1)
    assert created is True
    assert created_again is False
    assert again.id == row.id
    assert again.completed_at == row.completed_at

def test_ensure_settings_is_idempotent(db_session: Session, staff_user):
    first = crud_user_settings.ensure_for_user(db_session, user_id=staff_user.id)
    second = crud_user_settings.ensure_for_user(db_session, user_id=staff_user.id)
    assert first.id == second.id
    assert second.theme == "light"

def test_deleting_user_cascades(db_session: Session, staff_user):
    crud_video_progress.mark_watched(db_session, user_id=staff_user.id, course_id=1, section_id=1, video_id=1)
    crud_completion.create_if_absent(db_session, user_id=staff_user.id, course_id=1)
    crud_user_settings.ensure_for_user(db_session, user_id=staff_user.id)
    user_id = staff_user.id

    db_session.delete(crud_user.get(db_session, id=user_id))
    db_session.commit()

    assert crud_video_progress.count_completed_for_user(db_session, user_id=user_id) == 0
    assert crud_completion.get_by_user_and_course(db_session, user_id=user_id, course_id=1) is None
    assert crud_user_settings.get_by_user(db_session, user_id=user_id) is None

def test_seed_default_users(db_session: Session, monkeypatch):
    monkeypatch.setattr(settings, "SEED_DEFAULT_USERS", True)
    seed_default_users(db_session)
    seed_default_users(db_session)

    staff1 = crud_user.get_by_username(db_session, username="staff1")
    staff2 = crud_user.get_by_username(db_session, username="staff2")
    assert verify_password("staff123", staff1.password)
    assert verify_password("staff456", staff2.password)
    assert staff2.name == "Staff Member 2"

def test_seed_disabled(db_session: Session):
    seed_default_users(db_session)
    assert crud_user.get_by_username(db_session, username="staff1") is None
