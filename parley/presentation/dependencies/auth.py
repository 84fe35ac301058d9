"""
Authentication Dependency for FastAPI.

Identity is issued upstream. This dependency only verifies the HS256 service
token and maps its claims onto the caller's identity:

    sub          -> user_id
    email        -> email (optional)
    phone_number -> phone_number (optional)
    name         -> display_name (optional)

Config needed (from parley.config.settings):
- SERVICE_AUTH_SECRET
- SERVICE_AUTH_ISSUER
- SERVICE_AUTH_AUDIENCE
"""

from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from parley.config.settings import Config


@dataclass(frozen=True)
class AuthIdentity:
    user_id: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
    display_name: Optional[str] = None

    def __post_init__(self):
        if not self.user_id:
            raise ValueError("AuthIdentity must have a user_id.")


security = HTTPBearer()


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AuthIdentity:
    """
    Extract and validate the caller's identity from the JWT.

    Raises:
        HTTPException 401 if token is invalid, expired, or missing required claims
    """
    try:
        claims = jwt.decode(
            credentials.credentials,
            Config.SERVICE_AUTH_SECRET,
            algorithms=["HS256"],
            audience=Config.SERVICE_AUTH_AUDIENCE,
            issuer=Config.SERVICE_AUTH_ISSUER,
            options={"require": ["exp", "iat", "aud", "iss", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
        )

    user_id = claims.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing required claims in token",
        )

    return AuthIdentity(
        user_id=user_id,
        email=claims.get("email"),
        phone_number=claims.get("phone_number"),
        display_name=claims.get("name"),
    )
