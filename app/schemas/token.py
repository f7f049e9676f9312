from pydantic import BaseModel
from typing import Optional
from .user import UserSummary

class TokenPayload(BaseModel):
    user_id: int
    username: Optional[str] = None
    name: str
    discord_id: Optional[str] = None
    ephemeral: bool = False
    exp: Optional[int] = None

class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

class LoginResponse(BaseModel):
    """Response for the login endpoint."""
    token: str
    user: UserSummary
