from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from app.core.catalog import CourseCatalog, load_catalog
from app.core.database import get_db
from app.core.exceptions import PersistenceUnavailable, Unauthenticated
from app.crud.user import user as user_crud
from app.schemas.user import CurrentUser
from app.services.auth import auth_service
from app.services.course_progress import CourseProgressService
from app.services.identity import IdentityResolver, identity_resolver, to_current_user
from app.services.oauth import DiscordOAuthService, oauth_service

# Missing and invalid tokens both surface as 401 Unauthenticated
http_bearer = HTTPBearer(auto_error=False)

def get_catalog() -> CourseCatalog:
    return load_catalog()


def get_progress_service(catalog: CourseCatalog = Depends(get_catalog)) -> CourseProgressService:
    return CourseProgressService(catalog)


def get_oauth_service() -> DiscordOAuthService:
    return oauth_service


def get_identity_resolver() -> IdentityResolver:
    return identity_resolver


def get_current_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer)
) -> CurrentUser:
    token_data = auth_service.decode_token(credentials.credentials if credentials else None)

    if token_data.ephemeral:
        return CurrentUser(
            id=token_data.user_id,
            username=token_data.username,
            name=token_data.name,
            discord_id=token_data.discord_id,
            ephemeral=True,
        )

    try:
        user = user_crud.get(db, id=token_data.user_id)
    except (OperationalError, InterfaceError):
        raise PersistenceUnavailable()
    if not user:
        raise Unauthenticated("User not found")
    return to_current_user(user)
