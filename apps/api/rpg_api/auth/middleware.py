"""Firebase Authentication middleware for FastAPI."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth
from sqlalchemy.ext.asyncio import AsyncSession

from rpg_api.auth.schemas import AuthError, Caller, FirebaseUser
from rpg_api.config import get_settings
from rpg_api.database import get_db
from rpg_api.repositories.user_repository import get_user_by_firebase_uid

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> FirebaseUser:
    """
    Verify Firebase ID Token and return user information.

    Args:
        credentials: HTTP Bearer credentials from Authorization header.

    Returns:
        FirebaseUser with uid and email.

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": AuthError.MISSING_TOKEN.value},
            headers={"WWW-Authenticate": "Bearer"},
        )

    if credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": AuthError.INVALID_TOKEN.value},
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = credentials.credentials

    try:
        decoded_token = auth.verify_id_token(token)
        return FirebaseUser(
            uid=decoded_token["uid"],
            email=decoded_token.get("email", ""),
        )
    except Exception as e:
        error_message = str(e).lower()
        if "expired" in error_message:
            error_type = AuthError.EXPIRED_TOKEN
        else:
            error_type = AuthError.INVALID_TOKEN

        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": error_type.value},
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


async def get_current_caller(
    user: FirebaseUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> Caller:
    """Resolve the authenticated user to a Caller and apply the role gate.

    Only callers whose role is the player role or the admin role get through.

    Raises:
        HTTPException 401: If the Firebase user has no users row
        HTTPException 403: If the user's role is not allowed
    """
    db_user = await get_user_by_firebase_uid(session, user.uid)
    if db_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": AuthError.USER_NOT_FOUND.value},
        )

    settings = get_settings()
    if db_user.role not in (settings.player_role, settings.admin_role):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": AuthError.FORBIDDEN.value},
        )

    return Caller(user_id=db_user.id, role=db_user.role)
