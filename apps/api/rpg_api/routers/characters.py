"""Character (Personagem) API endpoints.

Provides endpoints under /api/Personagens for:
- GET /{id}, GET /GetAll - Read characters
- POST /, PUT /, DELETE /{id} - Create, update and delete characters
- POST /DeletePersonagemHabilidade - Remove a skill from a character
- PUT /RestaurarPontosVida, /ZerarRanking, /AtualizarFoto - Patch one character
- PUT /ZerarRankingRestaurarVidas - Reset ranking and health of every character
- GET /GetByUser, /GetByPerfil, /GetByNomeAproximado/{name} - Filtered listings

Every endpoint requires a caller with the player or admin role.
"""

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, status
from result import Result
from sqlalchemy.ext.asyncio import AsyncSession

from rpg_api.auth.middleware import get_current_caller
from rpg_api.auth.schemas import Caller
from rpg_api.database import get_db
from rpg_api.models import Character
from rpg_api.schemas.character import (
    BatchResetFailureResponse,
    BatchResetResponse,
    CharacterDetailResponse,
    CharacterIdRequest,
    CharacterRequest,
    CharacterResponse,
    CharacterSkillRequest,
    OwnerResponse,
    PortraitUpdateRequest,
    SkillResponse,
    WeaponResponse,
)
from rpg_api.services.character_service import (
    CharacterData,
    CharacterError,
    CharacterFailure,
    CharacterService,
)

router = APIRouter(
    prefix="/Personagens",
    dependencies=[Depends(get_current_caller)],
)

# Error mapping: CharacterError -> HTTP status code
# Clients tell failures apart by detail.error, not by status.
ERROR_STATUS_MAP: dict[CharacterError, int] = {
    CharacterError.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    CharacterError.NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    CharacterError.STORE_ERROR: status.HTTP_400_BAD_REQUEST,
}


def raise_for_failure(failure: CharacterFailure) -> NoReturn:
    """Convert a service failure into an HTTPException."""
    raise HTTPException(
        status_code=ERROR_STATUS_MAP.get(failure.error, status.HTTP_400_BAD_REQUEST),
        detail={"error": failure.error.value, "message": failure.message},
    )


def unwrap_or_raise(result: Result):
    """Return the Ok value of a service result or raise its failure."""
    if result.is_err():
        raise_for_failure(result.unwrap_err())
    return result.unwrap()


def character_to_response(character: Character) -> CharacterResponse:
    """Convert Character model to CharacterResponse DTO."""
    return CharacterResponse(
        id=character.id,
        name=character.name,
        healthPoints=character.health_points,
        disputes=character.disputes,
        wins=character.wins,
        losses=character.losses,
        portrait=character.portrait,
        ownerUserId=(
            str(character.owner_user_id) if character.owner_user_id else None
        ),
        weaponId=character.weapon_id,
    )


def character_to_detail_response(character: Character) -> CharacterDetailResponse:
    """Convert a Character with loaded relations to CharacterDetailResponse."""
    base = character_to_response(character)
    weapon = character.weapon
    owner = character.owner
    return CharacterDetailResponse(
        **base.model_dump(),
        weapon=(
            WeaponResponse(id=weapon.id, name=weapon.name, damage=weapon.damage)
            if weapon
            else None
        ),
        owner=(
            OwnerResponse(id=str(owner.id), username=owner.username, role=owner.role)
            if owner
            else None
        ),
        skills=[
            SkillResponse(
                id=link.skill.id, name=link.skill.name, damage=link.skill.damage
            )
            for link in character.skills
        ],
    )


def to_character_data(request: CharacterRequest) -> CharacterData:
    """Map the request body onto the service's input type."""
    return CharacterData(
        id=request.id,
        name=request.name,
        health_points=request.healthPoints,
        disputes=request.disputes,
        wins=request.wins,
        losses=request.losses,
        portrait=request.portrait,
    )


@router.get("/GetAll", response_model=list[CharacterResponse])
async def get_all_endpoint(
    session: AsyncSession = Depends(get_db),
) -> list[CharacterResponse]:
    """Return every character, without joins."""
    characters = unwrap_or_raise(await CharacterService(session).get_all())
    return [character_to_response(c) for c in characters]


@router.get("/GetByUser", response_model=list[CharacterResponse])
async def get_by_user_endpoint(
    caller: Caller = Depends(get_current_caller),
    session: AsyncSession = Depends(get_db),
) -> list[CharacterResponse]:
    """Return the characters owned by the caller."""
    characters = unwrap_or_raise(await CharacterService(session).list_by_caller(caller))
    return [character_to_response(c) for c in characters]


@router.get("/GetByPerfil", response_model=list[CharacterResponse])
async def get_by_role_endpoint(
    caller: Caller = Depends(get_current_caller),
    session: AsyncSession = Depends(get_db),
) -> list[CharacterResponse]:
    """Return all characters for admins, owned characters otherwise."""
    characters = unwrap_or_raise(await CharacterService(session).list_by_role(caller))
    return [character_to_response(c) for c in characters]


@router.get(
    "/GetByNomeAproximado/{name_fragment}", response_model=list[CharacterResponse]
)
async def search_by_name_endpoint(
    name_fragment: str,
    session: AsyncSession = Depends(get_db),
) -> list[CharacterResponse]:
    """Return characters whose name contains the fragment, ignoring case."""
    characters = unwrap_or_raise(
        await CharacterService(session).search_by_approx_name(name_fragment)
    )
    return [character_to_response(c) for c in characters]


@router.get("/{character_id}", response_model=CharacterDetailResponse | None)
async def get_by_id_endpoint(
    character_id: int,
    session: AsyncSession = Depends(get_db),
) -> CharacterDetailResponse | None:
    """Return one character with weapon, owner and skills, or null if missing."""
    character = unwrap_or_raise(await CharacterService(session).get_by_id(character_id))
    if character is None:
        return None
    return character_to_detail_response(character)


@router.post("", response_model=int)
async def create_endpoint(
    request: CharacterRequest,
    caller: Caller = Depends(get_current_caller),
    session: AsyncSession = Depends(get_db),
) -> int:
    """Create a character owned by the caller and return its id.

    Raises:
        HTTPException 400: If health points are out of range or the store fails
    """
    return unwrap_or_raise(
        await CharacterService(session).create(caller, to_character_data(request))
    )


@router.put("", response_model=int)
async def update_endpoint(
    request: CharacterRequest,
    session: AsyncSession = Depends(get_db),
) -> int:
    """Overwrite a character and return the number of affected rows."""
    return unwrap_or_raise(
        await CharacterService(session).update(to_character_data(request))
    )


@router.delete("/{character_id}", response_model=int)
async def delete_endpoint(
    character_id: int,
    session: AsyncSession = Depends(get_db),
) -> int:
    """Delete a character.

    Raises:
        HTTPException 400: If the character does not exist
    """
    return unwrap_or_raise(await CharacterService(session).delete(character_id))


@router.post("/DeletePersonagemHabilidade", response_model=int)
async def delete_character_skill_endpoint(
    request: CharacterSkillRequest,
    session: AsyncSession = Depends(get_db),
) -> int:
    """Remove a skill from a character.

    Raises:
        HTTPException 400: If the character/skill pair does not exist
    """
    return unwrap_or_raise(
        await CharacterService(session).delete_character_skill(
            request.characterId, request.skillId
        )
    )


@router.put("/RestaurarPontosVida", response_model=int)
async def restore_health_endpoint(
    request: CharacterIdRequest,
    session: AsyncSession = Depends(get_db),
) -> int:
    """Restore a character's health points to the maximum."""
    return unwrap_or_raise(await CharacterService(session).restore_health(request.id))


@router.put("/AtualizarFoto", response_model=int)
async def update_portrait_endpoint(
    request: PortraitUpdateRequest,
    session: AsyncSession = Depends(get_db),
) -> int:
    """Replace a character's portrait."""
    return unwrap_or_raise(
        await CharacterService(session).update_portrait(request.id, request.portrait)
    )


@router.put("/ZerarRanking", response_model=int)
async def reset_ranking_endpoint(
    request: CharacterIdRequest,
    session: AsyncSession = Depends(get_db),
) -> int:
    """Zero a character's disputes, wins and losses."""
    return unwrap_or_raise(await CharacterService(session).reset_ranking(request.id))


@router.put("/ZerarRankingRestaurarVidas", response_model=BatchResetResponse)
async def reset_all_endpoint(
    session: AsyncSession = Depends(get_db),
) -> BatchResetResponse:
    """Reset ranking and restore health of every character.

    Characters that fail are listed in ``failed``; the rest stay updated.
    """
    report = unwrap_or_raise(
        await CharacterService(session).reset_ranking_and_restore_health_all()
    )
    return BatchResetResponse(
        updated=report.updated,
        failed=[
            BatchResetFailureResponse(characterId=f.character_id, message=f.message)
            for f in report.failed
        ],
    )
