"""Authentication module for the RPG API."""

from rpg_api.auth.middleware import get_current_caller, get_current_user
from rpg_api.auth.schemas import AuthError, Caller, FirebaseUser

__all__ = ["get_current_caller", "get_current_user", "AuthError", "Caller", "FirebaseUser"]
