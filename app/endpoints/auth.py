from typing import Optional
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.utils import deps
from app.services.auth import auth_service
from app.services.identity import IdentityResolver
from app.services.oauth import DiscordOAuthService
from app.schemas.token import LoginRequest, LoginResponse

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
def login_for_access_token(
    request: LoginRequest,
    db: Session = Depends(deps.get_db),
    resolver: IdentityResolver = Depends(deps.get_identity_resolver)
):
    """Local username/password login; returns a session token and the user."""
    return auth_service.login(db=db, username=request.username, password=request.password, resolver=resolver)

@router.get("/auth/discord")
def discord_login(oauth: DiscordOAuthService = Depends(deps.get_oauth_service)):
    """Send the browser to Discord's authorization page."""
    return RedirectResponse(oauth.authorization_url(), status_code=status.HTTP_302_FOUND)

@router.get("/auth/discord/callback")
async def discord_callback(
    code: Optional[str] = None,
    error: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    oauth: DiscordOAuthService = Depends(deps.get_oauth_service),
    resolver: IdentityResolver = Depends(deps.get_identity_resolver)
):
    """Finish the Discord flow; outcome is delivered as ``?token=`` or ``?error=`` on the app root."""
    target = await auth_service.complete_discord_login(db, code=code, error=error, oauth=oauth, resolver=resolver)
    return RedirectResponse(target, status_code=status.HTTP_302_FOUND)
