from typing import Optional
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_username(self, db: Session, *, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    def get_by_discord_id(self, db: Session, *, discord_id: str) -> Optional[User]:
        return db.query(User).filter(User.discord_id == discord_id).first()

    def touch_last_login(self, db: Session, *, user_id: int, commit: bool = True) -> datetime:
        """Stamp last_login with a plain UPDATE; loaded User instances are left alone."""
        now = datetime.now(timezone.utc)
        db.query(User).filter(User.id == user_id).update({"last_login": now}, synchronize_session=False)
        if commit:
            db.commit()
        return now


user = CRUDUser(User)
