"""Authentication schemas for the RPG API."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from pydantic import BaseModel


class AuthError(str, Enum):
    """Authentication error types."""

    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    MISSING_TOKEN = "missing_token"
    USER_NOT_FOUND = "user_not_found"
    FORBIDDEN = "forbidden"


class FirebaseUser(BaseModel):
    """Firebase authenticated user information."""

    uid: str
    email: str


@dataclass(frozen=True)
class Caller:
    """Resolved identity handed to services.

    Attributes:
        user_id: The caller's row id in the users table
        role: The caller's role ('Jogador' or 'Admin')
    """

    user_id: UUID
    role: str
