"""Schema module for API request/response models."""

from rpg_api.schemas.character import CharacterDetailResponse, CharacterResponse

__all__ = ["CharacterDetailResponse", "CharacterResponse"]
