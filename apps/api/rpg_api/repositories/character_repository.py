"""Character repository for database operations.

Provides functions to:
- Get characters (by id with joins, all, by owner, by approximate name)
- Add, update and delete characters
- Patch individual character columns
- Get and delete character-skill links
"""

from typing import Any
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rpg_api.models import Character, CharacterSkill

# Columns written by a full-record update. Owner and weapon are never touched.
UPDATABLE_COLUMNS: frozenset[str] = frozenset(
    {"name", "health_points", "disputes", "wins", "losses", "portrait"}
)


async def get_character_with_relations(
    session: AsyncSession,
    character_id: int,
) -> Character | None:
    """Get character by ID with weapon, owner and skills eagerly loaded.

    Args:
        session: Database session
        character_id: The character's ID

    Returns:
        Character if found, None otherwise
    """
    query = (
        select(Character)
        .options(
            selectinload(Character.weapon),
            selectinload(Character.owner),
            selectinload(Character.skills).selectinload(CharacterSkill.skill),
        )
        .where(Character.id == character_id)
    )
    result = await session.execute(query)
    return result.scalar_one_or_none()


async def get_character_by_id(
    session: AsyncSession,
    character_id: int,
) -> Character | None:
    """Get character by ID without joins.

    Args:
        session: Database session
        character_id: The character's ID

    Returns:
        Character if found, None otherwise
    """
    query = select(Character).where(Character.id == character_id)
    result = await session.execute(query)
    return result.scalar_one_or_none()


async def get_all_characters(session: AsyncSession) -> list[Character]:
    """Get every character ordered by ID."""
    query = select(Character).order_by(Character.id)
    result = await session.execute(query)
    return list(result.scalars().all())


async def get_characters_by_owner(
    session: AsyncSession,
    owner_user_id: UUID,
) -> list[Character]:
    """Get all characters owned by a user.

    Args:
        session: Database session
        owner_user_id: The owning user's ID

    Returns:
        List of Character instances
    """
    query = (
        select(Character)
        .where(Character.owner_user_id == owner_user_id)
        .order_by(Character.id)
    )
    result = await session.execute(query)
    return list(result.scalars().all())


async def search_characters_by_name(
    session: AsyncSession,
    fragment: str,
) -> list[Character]:
    """Get characters whose name contains the fragment, ignoring case.

    LIKE wildcards in the fragment are matched literally.

    Args:
        session: Database session
        fragment: Part of the name to look for

    Returns:
        List of Character instances
    """
    query = (
        select(Character)
        .where(func.lower(Character.name).contains(fragment.lower(), autoescape=True))
        .order_by(Character.id)
    )
    result = await session.execute(query)
    return list(result.scalars().all())


async def add_character(
    session: AsyncSession,
    character: Character,
) -> Character:
    """Add a new character and flush so the store assigns its ID.

    Args:
        session: Database session
        character: Character to persist

    Returns:
        The same Character instance, with ``id`` populated
    """
    session.add(character)
    await session.flush()
    return character


async def update_character(
    session: AsyncSession,
    character_id: int,
    values: dict[str, Any],
) -> int:
    """Overwrite the updatable columns of a character.

    Args:
        session: Database session
        character_id: The character's ID
        values: New values keyed by column name, limited to UPDATABLE_COLUMNS

    Returns:
        Number of affected rows (0 if the character does not exist)

    Raises:
        ValueError: If values names a column outside UPDATABLE_COLUMNS
    """
    unknown = set(values) - UPDATABLE_COLUMNS
    if unknown:
        raise ValueError(f"Columns not updatable: {sorted(unknown)}")

    stmt = update(Character).where(Character.id == character_id).values(**values)
    result = await session.execute(stmt)
    return result.rowcount


async def patch_character_fields(
    session: AsyncSession,
    character: Character,
    fields: dict[str, Any],
) -> int:
    """Write only the given columns, and only those whose value differs.

    Args:
        session: Database session
        character: Loaded character to patch
        fields: Target values keyed by column name

    Returns:
        Number of affected rows, 0 when every field already had its target value
    """
    changed = {
        name: value
        for name, value in fields.items()
        if getattr(character, name) != value
    }
    if not changed:
        return 0

    stmt = update(Character).where(Character.id == character.id).values(**changed)
    result = await session.execute(stmt)
    return result.rowcount


async def delete_character(
    session: AsyncSession,
    character: Character,
) -> int:
    """Delete a character and its skill links.

    Returns:
        Number of deleted characters
    """
    await session.delete(character)
    await session.flush()
    return 1


async def get_character_skill(
    session: AsyncSession,
    character_id: int,
    skill_id: int,
) -> CharacterSkill | None:
    """Get a character-skill link by its composite key.

    Args:
        session: Database session
        character_id: The character's ID
        skill_id: The skill's ID

    Returns:
        CharacterSkill if found, None otherwise
    """
    query = select(CharacterSkill).where(
        CharacterSkill.character_id == character_id,
        CharacterSkill.skill_id == skill_id,
    )
    result = await session.execute(query)
    return result.scalar_one_or_none()


async def delete_character_skill(
    session: AsyncSession,
    character_skill: CharacterSkill,
) -> int:
    """Delete a character-skill link.

    Returns:
        Number of deleted links
    """
    await session.delete(character_skill)
    await session.flush()
    return 1
