from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(
    user_id: UUID, portal_type: str, organization_id: Optional[UUID] = None
) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User UUID
        portal_type: Portal the user signs in to (admin, tech, customer, vendor)
        organization_id: Organization UUID, None for platform users

    Returns:
        JWT token string (HS256, ACCESS_TOKEN_TTL_MINUTES expiry)

    Permissions are deliberately left out of the token; they are re-read
    from storage on every guarded call.
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "portal_type": portal_type,
        "organization_id": str(organization_id) if organization_id else None,
        "exp": now + timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES),
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
