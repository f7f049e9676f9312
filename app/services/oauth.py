import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from app.core.config import Settings, settings
from app.core.constants import DISCORD_OAUTH_SCOPE, OAuthErrorEnum
from app.core.exceptions import NotConfigured, PermissionDenied, ProviderError
from app.schemas.oauth import DiscordGuildMember, DiscordProfile

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://discord.com/api/oauth2/authorize"


def _provider_detail(response: httpx.Response, key: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return str(body.get(key) or body.get("message") or f"HTTP {response.status_code}")
    return f"HTTP {response.status_code}"


class DiscordOAuthService:
    """Authorization-code flow against Discord.

    Every provider call uses a bounded timeout and is attempted exactly once;
    failures are raised as ``ProviderError`` / ``PermissionDenied`` carrying the
    redirect error code the callback hands back to the browser.
    """

    def __init__(self, config: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.DISCORD_API_BASE,
            timeout=httpx.Timeout(self.config.DISCORD_HTTP_TIMEOUT_SECONDS),
            transport=self._transport,
        )

    def authorization_url(self) -> str:
        if not self.config.discord_enabled:
            raise NotConfigured()
        params = urlencode({
            "client_id": self.config.DISCORD_CLIENT_ID,
            "redirect_uri": self.config.DISCORD_REDIRECT_URI,
            "response_type": "code",
            "scope": DISCORD_OAUTH_SCOPE,
        })
        logger.info(f"Starting Discord OAuth flow, redirect URI: {self.config.DISCORD_REDIRECT_URI}")
        return f"{AUTHORIZE_URL}?{params}"

    async def authenticate(self, code: str) -> DiscordProfile:
        """Exchange ``code``, fetch the profile and apply the guild role gate."""
        async with self._client() as client:
            access_token = await self.exchange_code(client, code)
            profile = await self.fetch_profile(client, access_token)
            if self.config.role_gate_enabled:
                await self.check_membership(client, access_token)
        return profile

    async def exchange_code(self, client: httpx.AsyncClient, code: str) -> str:
        logger.info(f"Exchanging authorization code, client id: {self.config.DISCORD_CLIENT_ID}")
        try:
            response = await client.post(
                "/oauth2/token",
                data={
                    "client_id": self.config.DISCORD_CLIENT_ID,
                    "client_secret": self.config.DISCORD_CLIENT_SECRET,
                    "code": code,
                    "grant_type": "authorization_code",
                    "redirect_uri": self.config.DISCORD_REDIRECT_URI,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            response.raise_for_status()
            return response.json()["access_token"]
        except httpx.HTTPStatusError as exc:
            details = _provider_detail(exc.response, "error")
            logger.error(f"Token exchange failed: status={exc.response.status_code} details={details}")
            raise ProviderError("Token exchange failed", redirect_code=OAuthErrorEnum.TOKEN_EXCHANGE_FAILED.value, details=details)
        except (httpx.HTTPError, KeyError, ValueError) as exc:
            logger.error(f"Token exchange failed: {type(exc).__name__}: {exc}")
            raise ProviderError("Token exchange failed", redirect_code=OAuthErrorEnum.TOKEN_EXCHANGE_FAILED.value, details=str(exc))

    async def fetch_profile(self, client: httpx.AsyncClient, access_token: str) -> DiscordProfile:
        try:
            response = await client.get("/users/@me", headers={"Authorization": f"Bearer {access_token}"})
            response.raise_for_status()
            profile = DiscordProfile.model_validate(response.json())
        except httpx.HTTPStatusError as exc:
            details = _provider_detail(exc.response, "message")
            logger.error(f"Failed to fetch Discord user: status={exc.response.status_code} details={details}")
            raise ProviderError("Failed to fetch user", redirect_code=OAuthErrorEnum.FETCH_USER_FAILED.value, details=details)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(f"Failed to fetch Discord user: {type(exc).__name__}: {exc}")
            raise ProviderError("Failed to fetch user", redirect_code=OAuthErrorEnum.FETCH_USER_FAILED.value, details=str(exc))
        logger.info(f"Discord user fetched: {profile.username} ({profile.id})")
        return profile

    async def check_membership(self, client: httpx.AsyncClient, access_token: str) -> None:
        guild_id = self.config.DISCORD_GUILD_ID
        try:
            response = await client.get(
                f"/users/@me/guilds/{guild_id}/member",
                headers={"Authorization": f"Bearer {access_token}"},
            )
            response.raise_for_status()
            member = DiscordGuildMember.model_validate(response.json())
        except httpx.HTTPStatusError as exc:
            if not self.config.DISCORD_ROLE_CHECK_BLOCKING:
                logger.warning(f"Could not check guild membership (non-blocking): HTTP {exc.response.status_code}")
                return
            if exc.response.status_code == 404:
                logger.warning(f"User is not a member of guild {guild_id}")
                raise PermissionDenied("Not a member of the required server", redirect_code=OAuthErrorEnum.NOT_IN_GUILD.value)
            logger.error(f"Guild membership check failed: HTTP {exc.response.status_code}")
            raise ProviderError("Role check failed", redirect_code=OAuthErrorEnum.ROLE_CHECK_FAILED.value,
                                details=_provider_detail(exc.response, "message"))
        except (httpx.HTTPError, ValueError) as exc:
            if not self.config.DISCORD_ROLE_CHECK_BLOCKING:
                logger.warning(f"Could not check guild membership (non-blocking): {exc}")
                return
            logger.error(f"Guild membership check failed: {type(exc).__name__}: {exc}")
            raise ProviderError("Role check failed", redirect_code=OAuthErrorEnum.ROLE_CHECK_FAILED.value, details=str(exc))

        has_required_role = self.config.REQUIRED_DISCORD_ROLE_ID in member.roles
        has_admin_role = bool(self.config.ADMIN_DISCORD_ROLE_ID) and self.config.ADMIN_DISCORD_ROLE_ID in member.roles
        logger.info(f"Role check: required={has_required_role} admin={has_admin_role}")
        if not has_required_role and not has_admin_role:
            raise PermissionDenied("Missing required role", redirect_code=OAuthErrorEnum.NO_PERMISSION.value)


oauth_service = DiscordOAuthService(settings)
