from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

class UserBase(BaseModel):
    """Base user schema with common fields."""
    username: Optional[str] = None
    name: str

class UserCreate(UserBase):
    """Local account; ``password`` is already hashed."""
    password: Optional[str] = None
    email: Optional[str] = None
    discord_id: Optional[str] = None
    avatar_url: Optional[str] = None

class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None

class UserSummary(BaseModel):
    """User block returned alongside a freshly issued token."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    username: Optional[str] = None
    name: str

class UserProfile(UserSummary):
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    discord_id: Optional[str] = None

class CurrentUser(BaseModel):
    """Identity resolved from a session token.

    ``ephemeral`` identities were issued while storage was unavailable; they
    carry a synthetic negative id and are never backed by a ``users`` row.
    """
    id: int
    username: Optional[str] = None
    name: str
    discord_id: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    ephemeral: bool = False
