"""Character schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict


class CharacterRequest(BaseModel):
    """Request body for POST and PUT /api/Personagens.

    ``id`` is required for updates and ignored on create. Any owner field
    sent by the client is dropped; ownership comes from the caller.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str
    healthPoints: int = 100
    disputes: int = 0
    wins: int = 0
    losses: int = 0
    portrait: str | None = None


class CharacterIdRequest(BaseModel):
    """Request body for operations targeting a character by id."""

    model_config = ConfigDict(extra="ignore")

    id: int


class PortraitUpdateRequest(BaseModel):
    """Request body for PUT /api/Personagens/AtualizarFoto."""

    model_config = ConfigDict(extra="ignore")

    id: int
    portrait: str | None = None


class CharacterSkillRequest(BaseModel):
    """Request body for POST /api/Personagens/DeletePersonagemHabilidade."""

    characterId: int
    skillId: int


class CharacterResponse(BaseModel):
    """Response model for a character without joins."""

    id: int
    name: str
    healthPoints: int
    disputes: int
    wins: int
    losses: int
    portrait: str | None
    ownerUserId: str | None
    weaponId: int | None


class WeaponResponse(BaseModel):
    """Response model for the weapon carried by a character."""

    id: int
    name: str
    damage: int


class OwnerResponse(BaseModel):
    """Response model for the user owning a character."""

    id: str
    username: str | None
    role: str


class SkillResponse(BaseModel):
    """Response model for a skill learned by a character."""

    id: int
    name: str
    damage: int


class CharacterDetailResponse(CharacterResponse):
    """Response model for GET /api/Personagens/{id} with joins."""

    weapon: WeaponResponse | None
    owner: OwnerResponse | None
    skills: list[SkillResponse]


class BatchResetFailureResponse(BaseModel):
    """A character the batch reset could not update."""

    characterId: int
    message: str


class BatchResetResponse(BaseModel):
    """Response model for PUT /api/Personagens/ZerarRankingRestaurarVidas."""

    updated: list[int]
    failed: list[BatchResetFailureResponse]
