import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import HTTPException, status
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.core.constants import OAuthErrorEnum
from app.core.exceptions import AppError, InvalidCredentials, Unauthenticated
from app.core.security import create_access_token, decode_access_token, dummy_verify, verify_password
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.token import LoginResponse, TokenPayload
from app.schemas.user import CurrentUser, UserSummary
from app.services.identity import IdentityResolver, to_current_user
from app.services.oauth import DiscordOAuthService

logger = logging.getLogger(__name__)


def build_redirect(**params: Optional[str]) -> str:
    """Root URL carrying ``params`` as query string; ``None`` values are dropped."""
    query = urlencode({key: value for key, value in params.items() if value is not None})
    return f"/?{query}" if query else "/"


class AuthService:
    def verify_credentials(self, db: Session, *, username: str, password: str) -> User:
        """Unknown usernames and wrong passwords fail with the same error."""
        user = crud_user.get_by_username(db, username=username)
        if not user or not user.password:
            dummy_verify()
            logger.info(f"Failed login for username: {username}")
            raise InvalidCredentials()
        if not verify_password(password, user.password):
            logger.info(f"Failed login for username: {username}")
            raise InvalidCredentials()
        return user

    def login(self, db: Session, *, username: Optional[str], password: Optional[str], resolver: IdentityResolver) -> LoginResponse:
        if not username or not password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username and password required",
            )
        user = self.verify_credentials(db, username=username, password=password)
        current = resolver.record_login(db, to_current_user(user))
        logger.info(f"Login successful for: {username}")
        return LoginResponse(
            token=self.issue_token(current),
            user=UserSummary(id=current.id, username=current.username, name=current.name),
        )

    def issue_token(self, user: CurrentUser) -> str:
        payload = {"user_id": user.id, "username": user.username, "name": user.name}
        if user.discord_id:
            payload["discord_id"] = user.discord_id
        if user.ephemeral:
            payload["ephemeral"] = True
        return create_access_token(payload)

    def decode_token(self, token: Optional[str]) -> TokenPayload:
        if not token:
            raise Unauthenticated("No token provided")
        try:
            return TokenPayload(**decode_access_token(token))
        except JWTError:
            raise Unauthenticated("Invalid token")
        except ValidationError:
            raise Unauthenticated("Invalid token payload")

    async def complete_discord_login(
        self,
        db: Session,
        *,
        code: Optional[str],
        error: Optional[str],
        oauth: DiscordOAuthService,
        resolver: IdentityResolver,
    ) -> str:
        """Run the callback half of the OAuth flow and return where to send the browser.

        Failures never raise: the browser is mid-redirect, so they travel back
        as ``error`` / ``details`` query parameters.
        """
        if error:
            logger.warning(f"Discord OAuth callback returned error: {error}")
            return build_redirect(error=error)
        if not code:
            logger.warning("Discord OAuth callback without authorization code")
            return build_redirect(error=OAuthErrorEnum.NO_CODE.value)

        try:
            profile = await oauth.authenticate(code)
            # database work stays off the event loop
            current = await run_in_threadpool(resolver.resolve_discord, db, profile=profile)
            token = self.issue_token(current)
        except AppError as exc:
            return build_redirect(error=exc.redirect_code, details=exc.details)
        except Exception as exc:
            logger.error(f"Unexpected Discord OAuth error: {exc}", exc_info=True)
            return build_redirect(error=OAuthErrorEnum.DISCORD_ERROR.value, details=str(exc))

        logger.info(f"Discord login complete for user {current.id}")
        return build_redirect(token=token)


auth_service = AuthService()
