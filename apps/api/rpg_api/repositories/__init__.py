"""Repository layer for database operations."""

from rpg_api.repositories.character_repository import (
    add_character,
    delete_character,
    delete_character_skill,
    get_all_characters,
    get_character_by_id,
    get_character_skill,
    get_character_with_relations,
    get_characters_by_owner,
    patch_character_fields,
    search_characters_by_name,
    update_character,
)
from rpg_api.repositories.user_repository import get_user_by_firebase_uid

__all__ = [
    "add_character",
    "delete_character",
    "delete_character_skill",
    "get_all_characters",
    "get_character_by_id",
    "get_character_skill",
    "get_character_with_relations",
    "get_characters_by_owner",
    "get_user_by_firebase_uid",
    "patch_character_fields",
    "search_characters_by_name",
    "update_character",
]
