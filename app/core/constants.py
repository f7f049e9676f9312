from enum import Enum


DISCORD_OAUTH_SCOPE = "identify email guilds.members.read"
DISCORD_AVATAR_URL = "https://cdn.discordapp.com/avatars/{discord_id}/{avatar}.png"

DEFAULT_USERS = [
    {"username": "staff1", "password": "staff123", "name": "Staff Member 1"},
    {"username": "staff2", "password": "staff456", "name": "Staff Member 2"},
]


class ThemeEnum(str, Enum):
    LIGHT = "light"
    DARK = "dark"


DEFAULT_THEME = ThemeEnum.LIGHT
DEFAULT_NOTIFICATIONS_ENABLED = True
DEFAULT_EMAIL_NOTIFICATIONS = False


class OAuthErrorEnum(str, Enum):
    """Values sent back to the browser in the ``error`` query parameter."""
    NO_CODE = "no_code"
    TOKEN_EXCHANGE_FAILED = "token_exchange_failed"
    FETCH_USER_FAILED = "fetch_user_failed"
    NO_PERMISSION = "no_permission"
    NOT_IN_GUILD = "not_in_guild"
    ROLE_CHECK_FAILED = "role_check_failed"
    DB_ERROR = "db_error"
    DISCORD_ERROR = "discord_error"
