from pydantic import BaseModel, ConfigDict
from typing import List, Optional

from app.core.constants import DISCORD_AVATAR_URL


class DiscordProfile(BaseModel):
    """Subset of Discord's ``/users/@me`` payload the platform relies on."""
    model_config = ConfigDict(extra="ignore")

    id: str
    username: str
    global_name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.global_name or self.username

    @property
    def avatar_url(self) -> Optional[str]:
        if not self.avatar:
            return None
        return DISCORD_AVATAR_URL.format(discord_id=self.id, avatar=self.avatar)


class DiscordGuildMember(BaseModel):
    model_config = ConfigDict(extra="ignore")

    roles: List[str] = []


class ConfigDebug(BaseModel):
    client_id: str
    redirect_uri: str
    guild_id: str


class PublicConfig(BaseModel):
    discord_enabled: bool
    debug: ConfigDebug
