"""Character Service for managing player characters.

Applies the character rules on top of the repository layer:
- health points must stay within 0..max_health_points, counters non-negative
- the owner of a new character is always the caller
- listing by role shows everything to admins and only owned characters otherwise
- restore health, reset ranking and portrait changes patch only their own columns
"""

from dataclasses import dataclass, field
from enum import Enum

from result import Err, Ok, Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rpg_api.auth.schemas import Caller
from rpg_api.config import get_settings
from rpg_api.models import Character
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
from rpg_api.utils.logging import get_logger

logger = get_logger(__name__)

RANKING_COUNTERS: tuple[str, ...] = ("disputes", "wins", "losses")


class CharacterError(Enum):
    """Error types for character operations."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    STORE_ERROR = "store_error"


@dataclass(frozen=True)
class CharacterFailure:
    """Failure returned by CharacterService, with the raw message."""

    error: CharacterError
    message: str


@dataclass
class CharacterData:
    """Client-supplied character fields for create and update."""

    name: str
    health_points: int
    disputes: int = 0
    wins: int = 0
    losses: int = 0
    portrait: str | None = None
    id: int | None = None


@dataclass
class BatchResetFailure:
    """A character the batch reset could not update."""

    character_id: int
    message: str


@dataclass
class BatchResetReport:
    """Outcome of resetting ranking and restoring health for every character."""

    updated: list[int] = field(default_factory=list)
    failed: list[BatchResetFailure] = field(default_factory=list)


def _not_found(character_id: int) -> Err[CharacterFailure]:
    return Err(
        CharacterFailure(
            CharacterError.NOT_FOUND, f"Character {character_id} not found"
        )
    )


class CharacterService:
    """Service for character CRUD and ranking/health maintenance."""

    def __init__(
        self,
        session: AsyncSession,
        max_health_points: int | None = None,
        admin_role: str | None = None,
    ) -> None:
        settings = get_settings()
        self.session = session
        self.max_health_points = (
            settings.max_health_points
            if max_health_points is None
            else max_health_points
        )
        self.admin_role = admin_role or settings.admin_role

    async def get_by_id(
        self, character_id: int
    ) -> Result[Character | None, CharacterFailure]:
        """Get a character with weapon, owner and skills loaded.

        A missing character is not an error: ``Ok(None)`` is returned.
        """
        try:
            character = await get_character_with_relations(self.session, character_id)
        except SQLAlchemyError as e:
            return await self._store_failure(f"get character {character_id}", e)
        return Ok(character)

    async def get_all(self) -> Result[list[Character], CharacterFailure]:
        """Get every character."""
        try:
            characters = await get_all_characters(self.session)
        except SQLAlchemyError as e:
            return await self._store_failure("list characters", e)
        return Ok(characters)

    async def create(
        self, caller: Caller, data: CharacterData
    ) -> Result[int, CharacterFailure]:
        """Create a character owned by the caller.

        Args:
            caller: Identity of the requesting user, becomes the owner
            data: Character fields; ``data.id`` is ignored

        Returns:
            Result containing the new character's ID or CharacterFailure
        """
        failure = self._validate(data)
        if failure is not None:
            return Err(failure)

        character = Character(
            name=data.name,
            health_points=data.health_points,
            disputes=data.disputes,
            wins=data.wins,
            losses=data.losses,
            portrait=data.portrait,
            owner_user_id=caller.user_id,
        )
        try:
            await add_character(self.session, character)
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._store_failure("create character", e)

        logger.info(f"Created character {character.id} for user {caller.user_id}")
        return Ok(character.id)

    async def update(self, data: CharacterData) -> Result[int, CharacterFailure]:
        """Overwrite a character's fields, leaving owner and weapon as they are.

        Returns:
            Result containing the number of affected rows (0 for an unknown ID)
        """
        if data.id is None:
            return Err(
                CharacterFailure(
                    CharacterError.VALIDATION_ERROR,
                    "Character id is required for update",
                )
            )
        failure = self._validate(data)
        if failure is not None:
            return Err(failure)

        values = {
            "name": data.name,
            "health_points": data.health_points,
            "disputes": data.disputes,
            "wins": data.wins,
            "losses": data.losses,
            "portrait": data.portrait,
        }
        try:
            affected = await update_character(self.session, data.id, values)
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._store_failure(f"update character {data.id}", e)

        logger.info(f"Updated character {data.id} ({affected} row(s))")
        return Ok(affected)

    async def delete(self, character_id: int) -> Result[int, CharacterFailure]:
        """Delete a character by ID."""
        try:
            character = await get_character_by_id(self.session, character_id)
            if character is None:
                return _not_found(character_id)
            affected = await delete_character(self.session, character)
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._store_failure(f"delete character {character_id}", e)

        logger.info(f"Deleted character {character_id}")
        return Ok(affected)

    async def delete_character_skill(
        self, character_id: int, skill_id: int
    ) -> Result[int, CharacterFailure]:
        """Remove the link between a character and a skill."""
        try:
            character_skill = await get_character_skill(
                self.session, character_id, skill_id
            )
            if character_skill is None:
                return Err(
                    CharacterFailure(
                        CharacterError.NOT_FOUND,
                        f"Character {character_id} or skill {skill_id} not found",
                    )
                )
            affected = await delete_character_skill(self.session, character_skill)
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._store_failure(
                f"delete skill {skill_id} of character {character_id}", e
            )

        logger.info(f"Removed skill {skill_id} from character {character_id}")
        return Ok(affected)

    async def restore_health(self, character_id: int) -> Result[int, CharacterFailure]:
        """Set health points back to the maximum.

        Returns:
            Result containing 1 if the value changed, 0 if it was already full
        """
        return await self._patch(
            character_id,
            {"health_points": self.max_health_points},
            "restore health of",
        )

    async def reset_ranking(self, character_id: int) -> Result[int, CharacterFailure]:
        """Zero the disputes, wins and losses counters."""
        return await self._patch(
            character_id,
            {counter: 0 for counter in RANKING_COUNTERS},
            "reset ranking of",
        )

    async def update_portrait(
        self, character_id: int, portrait: str | None
    ) -> Result[int, CharacterFailure]:
        """Replace the character's portrait, writing the column even if unchanged."""
        return await self._patch(
            character_id,
            {"portrait": portrait},
            "update portrait of",
            write_unchanged=True,
        )

    async def reset_ranking_and_restore_health_all(
        self,
    ) -> Result[BatchResetReport, CharacterFailure]:
        """Reset ranking and restore health for every character.

        Each character is patched inside its own savepoint. A character that
        fails is rolled back and reported; the others are still committed.
        """
        try:
            characters = await get_all_characters(self.session)
        except SQLAlchemyError as e:
            return await self._store_failure("list characters", e)

        report = BatchResetReport()
        ranking = {counter: 0 for counter in RANKING_COUNTERS}
        health = {"health_points": self.max_health_points}
        for character in characters:
            character_id = character.id
            try:
                async with self.session.begin_nested():
                    await patch_character_fields(self.session, character, ranking)
                    await patch_character_fields(self.session, character, health)
            except SQLAlchemyError as e:
                logger.warning(f"Batch reset skipped character {character_id}: {e}")
                report.failed.append(BatchResetFailure(character_id, str(e)))
                continue
            report.updated.append(character_id)

        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._store_failure("commit batch reset", e)

        logger.info(
            f"Batch reset done: {len(report.updated)} updated, "
            f"{len(report.failed)} failed"
        )
        return Ok(report)

    async def list_by_caller(
        self, caller: Caller
    ) -> Result[list[Character], CharacterFailure]:
        """Get the characters owned by the caller."""
        try:
            characters = await get_characters_by_owner(self.session, caller.user_id)
        except SQLAlchemyError as e:
            return await self._store_failure(
                f"list characters of user {caller.user_id}", e
            )
        return Ok(characters)

    async def list_by_role(
        self, caller: Caller
    ) -> Result[list[Character], CharacterFailure]:
        """Get every character for admins, only owned ones for everybody else."""
        if caller.role == self.admin_role:
            return await self.get_all()
        return await self.list_by_caller(caller)

    async def search_by_approx_name(
        self, fragment: str
    ) -> Result[list[Character], CharacterFailure]:
        """Get characters whose name contains the fragment, ignoring case."""
        try:
            characters = await search_characters_by_name(self.session, fragment)
        except SQLAlchemyError as e:
            return await self._store_failure(f"search characters by '{fragment}'", e)
        return Ok(characters)

    async def _patch(
        self,
        character_id: int,
        fields: dict,
        action: str,
        write_unchanged: bool = False,
    ) -> Result[int, CharacterFailure]:
        try:
            character = await get_character_by_id(self.session, character_id)
            if character is None:
                return _not_found(character_id)
            if write_unchanged:
                affected = await update_character(self.session, character_id, fields)
            else:
                affected = await patch_character_fields(
                    self.session, character, fields
                )
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._store_failure(f"{action} character {character_id}", e)

        logger.info(
            f"Patched {', '.join(fields)} of character {character_id} "
            f"({affected} row(s))"
        )
        return Ok(affected)

    def _validate(self, data: CharacterData) -> CharacterFailure | None:
        if data.health_points > self.max_health_points:
            return CharacterFailure(
                CharacterError.VALIDATION_ERROR,
                f"Health points cannot be greater than {self.max_health_points}",
            )
        if data.health_points < 0:
            return CharacterFailure(
                CharacterError.VALIDATION_ERROR, "Health points cannot be negative"
            )
        for counter in RANKING_COUNTERS:
            if getattr(data, counter) < 0:
                return CharacterFailure(
                    CharacterError.VALIDATION_ERROR, f"{counter} cannot be negative"
                )
        return None

    async def _store_failure(
        self, action: str, error: SQLAlchemyError
    ) -> Err[CharacterFailure]:
        logger.error(f"Failed to {action}: {error}")
        await self.session.rollback()
        return Err(CharacterFailure(CharacterError.STORE_ERROR, str(error)))
