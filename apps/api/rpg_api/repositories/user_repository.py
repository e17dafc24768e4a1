"""User repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rpg_api.models import User


async def get_user_by_firebase_uid(
    session: AsyncSession, firebase_uid: str
) -> User | None:
    """Get user by Firebase UID.

    Args:
        session: Database session
        firebase_uid: The user's Firebase UID

    Returns:
        User if found, None otherwise
    """
    query = select(User).where(User.firebase_uid == firebase_uid)
    result = await session.execute(query)
    return result.scalar_one_or_none()
