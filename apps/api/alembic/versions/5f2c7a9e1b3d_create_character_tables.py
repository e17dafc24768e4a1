"""create_character_tables

Revision ID: 5f2c7a9e1b3d
Revises:
Create Date: 2026-10-19 10:12:31.204518

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers, used by Alembic.
revision: str = "5f2c7a9e1b3d"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, weapons, skills, characters and character_skills."""
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("firebase_uid", sa.String(128), unique=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("username", sa.String(100), nullable=True),
        sa.Column(
            "role", sa.String(20), server_default="Jogador", nullable=False
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("idx_users_firebase_uid", "users", ["firebase_uid"])

    op.create_table(
        "weapons",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("damage", sa.Integer(), server_default="0", nullable=False),
    )

    op.create_table(
        "skills",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("damage", sa.Integer(), server_default="0", nullable=False),
    )

    op.create_table(
        "characters",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column(
            "health_points", sa.Integer(), server_default="100", nullable=False
        ),
        sa.Column("disputes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("wins", sa.Integer(), server_default="0", nullable=False),
        sa.Column("losses", sa.Integer(), server_default="0", nullable=False),
        sa.Column("portrait", sa.Text(), nullable=True),
        sa.Column(
            "owner_user_id",
            UUID(as_uuid=True),
            sa.ForeignKey("users.id"),
            nullable=True,
        ),
        sa.Column(
            "weapon_id", sa.Integer(), sa.ForeignKey("weapons.id"), nullable=True
        ),
    )
    op.create_index("idx_characters_owner_user_id", "characters", ["owner_user_id"])
    op.create_index("idx_characters_name", "characters", ["name"])

    op.create_table(
        "character_skills",
        sa.Column(
            "character_id",
            sa.Integer(),
            sa.ForeignKey("characters.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "skill_id",
            sa.Integer(),
            sa.ForeignKey("skills.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


def downgrade() -> None:
    """Drop all character tables."""
    op.drop_table("character_skills")
    op.drop_index("idx_characters_name", table_name="characters")
    op.drop_index("idx_characters_owner_user_id", table_name="characters")
    op.drop_table("characters")
    op.drop_table("skills")
    op.drop_table("weapons")
    op.drop_index("idx_users_firebase_uid", table_name="users")
    op.drop_table("users")
