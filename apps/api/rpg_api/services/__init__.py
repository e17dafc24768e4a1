"""Services package for business logic."""

from rpg_api.services.character_service import (
    BatchResetFailure,
    BatchResetReport,
    CharacterData,
    CharacterError,
    CharacterFailure,
    CharacterService,
)

__all__ = [
    "BatchResetFailure",
    "BatchResetReport",
    "CharacterData",
    "CharacterError",
    "CharacterFailure",
    "CharacterService",
]
