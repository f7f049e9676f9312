from pydantic_settings import BaseSettings
from typing import Optional, List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Staff Course Platform"
    VERSION: str = "1.0.0"
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    # None keeps session tokens non-expiring
    ACCESS_TOKEN_EXPIRE_MINUTES: Optional[int] = None

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./course_platform.db"
    SEED_DEFAULT_USERS: bool = True

    # Discord OAuth2
    DISCORD_CLIENT_ID: Optional[str] = None
    DISCORD_CLIENT_SECRET: Optional[str] = None
    DISCORD_REDIRECT_URI: str = "http://localhost:3000/api/auth/discord/callback"
    DISCORD_GUILD_ID: Optional[str] = None
    REQUIRED_DISCORD_ROLE_ID: Optional[str] = None
    ADMIN_DISCORD_ROLE_ID: Optional[str] = None
    DISCORD_API_BASE: str = "https://discord.com/api"
    DISCORD_HTTP_TIMEOUT_SECONDS: float = 10.0
    DISCORD_ROLE_CHECK_BLOCKING: bool = False
    OAUTH_EPHEMERAL_FALLBACK: bool = True

    # Course content
    COURSE_CATALOG_PATH: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = "logs"

    @property
    def discord_enabled(self) -> bool:
        return bool(self.DISCORD_CLIENT_ID)

    @property
    def role_gate_enabled(self) -> bool:
        return bool(self.DISCORD_GUILD_ID and self.REQUIRED_DISCORD_ROLE_ID)

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
