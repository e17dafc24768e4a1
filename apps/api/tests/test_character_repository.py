"""Tests for Character Repository.

Tests for the character repository that handles:
- Lookups (by id with relations, all, by owner, by approximate name)
- Add / update / delete character
- Field-level patches that only write changed columns
- Character-skill link lookup and deletion
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from uuid6 import uuid7

from rpg_api.models import Character, CharacterSkill


def compiled(statement) -> str:
    """Render a statement as PostgreSQL SQL text."""
    return str(statement.compile(dialect=postgresql.dialect()))


def session_returning(value=None, rowcount: int = 1) -> AsyncMock:
    """Create a mock session whose execute() result yields ``value``."""
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=value)
    result.scalars = MagicMock(
        return_value=MagicMock(all=MagicMock(return_value=value or []))
    )
    result.rowcount = rowcount
    session = AsyncMock()
    session.execute = AsyncMock(return_value=result)
    session.add = MagicMock()
    return session


class TestGetCharacter:
    """Tests for get_character_with_relations and get_character_by_id."""

    @pytest.mark.asyncio
    async def test_with_relations_loads_weapon_owner_and_skills(self) -> None:
        from rpg_api.repositories.character_repository import (
            get_character_with_relations,
        )

        character = Character(id=7, name="Thane")
        session = session_returning(character)

        result = await get_character_with_relations(session, 7)

        assert result is character
        statement = session.execute.call_args.args[0]
        # weapon, owner, skills -> skill
        assert len(statement._with_options) == 3
        assert "characters.id = " in compiled(statement)

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(self) -> None:
        from rpg_api.repositories.character_repository import get_character_by_id

        session = session_returning(None)

        assert await get_character_by_id(session, 404) is None


class TestListings:
    """Tests for get_all_characters, get_characters_by_owner, search."""

    @pytest.mark.asyncio
    async def test_get_all_orders_by_id(self) -> None:
        from rpg_api.repositories.character_repository import get_all_characters

        characters = [Character(id=1, name="A"), Character(id=2, name="B")]
        session = session_returning(characters)

        result = await get_all_characters(session)

        assert result == characters
        assert "ORDER BY characters.id" in compiled(session.execute.call_args.args[0])

    @pytest.mark.asyncio
    async def test_by_owner_filters_on_owner(self) -> None:
        from rpg_api.repositories.character_repository import get_characters_by_owner

        session = session_returning([])

        result = await get_characters_by_owner(session, uuid7())

        assert result == []
        sql = compiled(session.execute.call_args.args[0])
        assert "characters.owner_user_id = " in sql

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_substring(self) -> None:
        from rpg_api.repositories.character_repository import search_characters_by_name

        session = session_returning([])

        await search_characters_by_name(session, "RA")

        statement = session.execute.call_args.args[0]
        sql = compiled(statement)
        assert "lower(characters.name) LIKE" in sql
        params = statement.compile(dialect=postgresql.dialect()).params
        assert "ra" in params.values()

    @pytest.mark.asyncio
    async def test_search_escapes_wildcards(self) -> None:
        from rpg_api.repositories.character_repository import search_characters_by_name

        session = session_returning([])

        await search_characters_by_name(session, "50%")

        statement = session.execute.call_args.args[0]
        assert "ESCAPE" in compiled(statement)
        params = statement.compile(dialect=postgresql.dialect()).params
        assert "50/%" in params.values()


class TestAddUpdateDelete:
    """Tests for add_character, update_character and delete_character."""

    @pytest.mark.asyncio
    async def test_add_character_flushes(self) -> None:
        from rpg_api.repositories.character_repository import add_character

        session = session_returning()
        character = Character(name="Thane", health_points=80)

        result = await add_character(session, character)

        assert result is character
        session.add.assert_called_once_with(character)
        session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_character_returns_rowcount(self) -> None:
        from rpg_api.repositories.character_repository import update_character

        session = session_returning(rowcount=0)

        affected = await update_character(session, 404, {"name": "Ghost"})

        assert affected == 0
        sql = compiled(session.execute.call_args.args[0])
        assert sql.startswith("UPDATE characters SET name=")

    @pytest.mark.asyncio
    async def test_update_character_refuses_owner(self) -> None:
        """Ownership is fixed at creation."""
        from rpg_api.repositories.character_repository import update_character

        session = session_returning()

        with pytest.raises(ValueError):
            await update_character(session, 7, {"owner_user_id": uuid7()})
        session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_character(self) -> None:
        from rpg_api.repositories.character_repository import delete_character

        session = session_returning()
        character = Character(id=7, name="Thane")

        assert await delete_character(session, character) == 1
        session.delete.assert_awaited_once_with(character)
        session.flush.assert_awaited_once()


class TestPatchCharacterFields:
    """Tests for patch_character_fields."""

    @pytest.mark.asyncio
    async def test_writes_only_changed_columns(self) -> None:
        from rpg_api.repositories.character_repository import patch_character_fields

        session = session_returning(rowcount=1)
        character = Character(id=7, name="Thane", disputes=4, wins=0, losses=4)

        affected = await patch_character_fields(
            session, character, {"disputes": 0, "wins": 0, "losses": 0}
        )

        assert affected == 1
        sql = compiled(session.execute.call_args.args[0])
        assert "disputes=" in sql
        assert "losses=" in sql
        assert "wins=" not in sql
        assert "name=" not in sql
        assert "characters.id = " in sql

    @pytest.mark.asyncio
    async def test_no_change_issues_no_statement(self) -> None:
        from rpg_api.repositories.character_repository import patch_character_fields

        session = session_returning()
        character = Character(id=7, name="Thane", health_points=100)

        affected = await patch_character_fields(
            session, character, {"health_points": 100}
        )

        assert affected == 0
        session.execute.assert_not_awaited()


class TestCharacterSkill:
    """Tests for get_character_skill and delete_character_skill."""

    @pytest.mark.asyncio
    async def test_lookup_uses_both_keys(self) -> None:
        from rpg_api.repositories.character_repository import get_character_skill

        link = CharacterSkill(character_id=7, skill_id=2)
        session = session_returning(link)

        assert await get_character_skill(session, 7, 2) is link
        sql = compiled(session.execute.call_args.args[0])
        assert "character_skills.character_id = " in sql
        assert "character_skills.skill_id = " in sql

    @pytest.mark.asyncio
    async def test_delete_link(self) -> None:
        from rpg_api.repositories.character_repository import delete_character_skill

        session = session_returning()
        link = CharacterSkill(character_id=7, skill_id=2)

        assert await delete_character_skill(session, link) == 1
        session.delete.assert_awaited_once_with(link)
