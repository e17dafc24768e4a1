"""SQLAlchemy ORM models for the RPG API."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from uuid6 import uuid7


def generate_uuid7() -> UUID:
    """Generate a new UUID v7."""
    return uuid7()


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class User(Base):
    """Player account, the owner of characters."""

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), primary_key=True, default=generate_uuid7
    )
    firebase_uid: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # 'Jogador' | 'Admin'
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="Jogador")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    characters: Mapped[list["Character"]] = relationship(
        "Character", back_populates="owner"
    )

    __table_args__ = (Index("idx_users_firebase_uid", "firebase_uid"),)


class Weapon(Base):
    """Weapon a character may carry. Not managed by this service."""

    __tablename__ = "weapons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    damage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Skill(Base):
    """Skill a character may learn. Not managed by this service."""

    __tablename__ = "skills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    damage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Character(Base):
    """Character (Personagem) owned by a user."""

    __tablename__ = "characters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    health_points: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    disputes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    losses: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    portrait: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_user_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey("users.id"), nullable=True
    )
    weapon_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("weapons.id"), nullable=True
    )

    # Relationships
    owner: Mapped[Optional["User"]] = relationship("User", back_populates="characters")
    weapon: Mapped[Optional["Weapon"]] = relationship("Weapon")
    skills: Mapped[list["CharacterSkill"]] = relationship(
        "CharacterSkill", back_populates="character", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_characters_owner_user_id", "owner_user_id"),
        Index("idx_characters_name", "name"),
    )


class CharacterSkill(Base):
    """Join record linking a character to a learned skill."""

    __tablename__ = "character_skills"

    character_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True
    )
    skill_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True
    )

    # Relationships
    character: Mapped["Character"] = relationship("Character", back_populates="skills")
    skill: Mapped["Skill"] = relationship("Skill")
