import hashlib
import logging

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.constants import OAuthErrorEnum
from app.core.exceptions import PersistenceUnavailable
from app.crud.user import user as crud_user
from app.crud.user_settings import user_settings as crud_user_settings
from app.models.user import User
from app.schemas.oauth import DiscordProfile
from app.schemas.user import CurrentUser

logger = logging.getLogger(__name__)


def ephemeral_user_id(discord_id: str) -> int:
    """Stable negative id for a user we could not persist; never collides with a database id."""
    digest = hashlib.sha256(discord_id.encode("utf-8")).digest()
    return -(int.from_bytes(digest[:4], "big") & 0x7FFFFFFF) - 1


def to_current_user(user: User) -> CurrentUser:
    return CurrentUser(
        id=user.id,
        username=user.username,
        name=user.name,
        discord_id=user.discord_id,
        email=user.email,
        avatar_url=user.avatar_url,
        created_at=user.created_at,
        last_login=user.last_login,
    )


class IdentityResolver:
    """Find-or-create users for external identities.

    With ``ephemeral_fallback`` enabled, a storage outage yields a synthetic,
    non-persisted identity so the login can still complete; otherwise the
    outage is raised as ``PersistenceUnavailable``.
    """

    def __init__(self, ephemeral_fallback: bool = True):
        self.ephemeral_fallback = ephemeral_fallback

    def resolve_discord(self, db: Session, *, profile: DiscordProfile) -> CurrentUser:
        try:
            # plain values only past this point
            current = to_current_user(self._find_or_create(db, profile))
        except (OperationalError, InterfaceError) as exc:
            self._safe_rollback(db)
            if not self.ephemeral_fallback:
                logger.error(f"Database unavailable while resolving Discord user {profile.id}: {exc}")
                raise PersistenceUnavailable(redirect_code=OAuthErrorEnum.DB_ERROR.value, details=str(exc.orig or exc))
            logger.warning(f"Database error, using temporary user for Discord user {profile.id}: {exc}")
            return self.ephemeral_identity(profile)

        return self.record_login(db, current)

    def ephemeral_identity(self, profile: DiscordProfile) -> CurrentUser:
        return CurrentUser(
            id=ephemeral_user_id(profile.id),
            username=profile.username,
            name=profile.display_name,
            discord_id=profile.id,
            email=profile.email,
            avatar_url=profile.avatar_url,
            ephemeral=True,
        )

    def record_login(self, db: Session, current: CurrentUser) -> CurrentUser:
        """Best effort: a failed last-login write never fails the login.

        Works on the already-built ``current`` so nothing reads the ORM
        instance after a rollback.
        """
        try:
            last_login = crud_user.touch_last_login(db, user_id=current.id)
        except SQLAlchemyError as exc:
            self._safe_rollback(db)
            logger.warning(f"Failed to update last_login for user {current.id}: {exc}")
            return current
        return current.model_copy(update={"last_login": last_login})

    def _find_or_create(self, db: Session, profile: DiscordProfile) -> User:
        user = crud_user.get_by_discord_id(db, discord_id=profile.id)
        if user:
            logger.info(f"Existing user found for Discord user {profile.id}: ID {user.id}")
            return crud_user.update(
                db,
                db_obj=user,
                obj_in={"name": profile.display_name, "email": profile.email, "avatar_url": profile.avatar_url},
            )

        username = profile.username
        if crud_user.get_by_username(db, username=username):
            # local account already owns this username
            username = None
        try:
            user = crud_user.create(
                db,
                obj_in={
                    "discord_id": profile.id,
                    "username": username,
                    "name": profile.display_name,
                    "email": profile.email,
                    "avatar_url": profile.avatar_url,
                },
                commit=False,
            )
            crud_user_settings.ensure_for_user(db, user_id=user.id, commit=False)
            db.commit()
        except IntegrityError:
            # a concurrent callback created the same Discord user first
            db.rollback()
            user = crud_user.get_by_discord_id(db, discord_id=profile.id)
            if not user:
                raise
            return user
        logger.info(f"New user created for Discord user {profile.id}: ID {user.id}")
        return user

    @staticmethod
    def _safe_rollback(db: Session) -> None:
        try:
            db.rollback()
        except SQLAlchemyError:
            logger.debug("Rollback failed after a database error", exc_info=True)


identity_resolver = IdentityResolver(ephemeral_fallback=settings.OAUTH_EPHEMERAL_FALLBACK)
