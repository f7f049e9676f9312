from fastapi import APIRouter

from app.core.config import settings
from app.schemas.oauth import ConfigDebug, PublicConfig

router = APIRouter()

@router.get("/config", response_model=PublicConfig)
def read_public_config():
    """Tells the login page whether Discord login is available."""
    client_id = settings.DISCORD_CLIENT_ID
    return PublicConfig(
        discord_enabled=settings.discord_enabled,
        debug=ConfigDebug(
            client_id=f"{client_id[:8]}..." if client_id else "not set",
            redirect_uri=settings.DISCORD_REDIRECT_URI,
            guild_id=settings.DISCORD_GUILD_ID or "not set",
        ),
    )
