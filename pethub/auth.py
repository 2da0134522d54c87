"""
Session verification for API requests.

Users sign in through the hosted auth platform, which issues a signed JWT. We
only verify that token and map its subject to a business through the profiles
table; every domain query is then scoped to that business id.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.orm import Session

from . import config
from .database import get_db
from .models import Profile

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class AuthConfigurationError(Exception):
    """The server has no JWT secret to verify tokens with"""


class InvalidTokenError(Exception):
    """The bearer token is malformed, expired or not signed by the auth platform"""


@dataclass
class AuthenticatedUser:
    user_id: str
    email: Optional[str] = None
    claims: dict[str, Any] = field(default_factory=dict)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """ "Bearer <token>" (scheme is case-insensitive) -> "<token>" """
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def verify_access_token(token: str) -> AuthenticatedUser:
    """
    Verify the signature, expiry and audience of a session JWT.

    Raises:
        AuthConfigurationError: If no JWT secret is configured
        InvalidTokenError: If the token cannot be trusted
    """
    if not config.SUPABASE_JWT_SECRET:
        logger.error("SUPABASE_JWT_SECRET not configured")
        raise AuthConfigurationError("JWT secret not configured")

    if len(token.split(".")) != 3:
        logger.warning(f"Malformed token received, length: {len(token)}")
        raise InvalidTokenError("Invalid token format")

    try:
        claims = jwt.decode(
            token,
            config.SUPABASE_JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            audience=config.JWT_AUDIENCE,
        )
    except ExpiredSignatureError as e:
        logger.info("Token expired")
        raise InvalidTokenError("Token has expired") from e
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise InvalidTokenError("Invalid token") from e

    user_id = claims.get("sub")
    if not user_id:
        logger.warning(f"Token missing subject claim. Available claims: {list(claims.keys())}")
        raise InvalidTokenError("Invalid token claims")

    return AuthenticatedUser(user_id=user_id, email=claims.get("email"), claims=claims)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthenticatedUser:
    """Get the current user from the bearer token"""
    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    try:
        return verify_access_token(credentials.credentials)
    except AuthConfigurationError as e:
        raise HTTPException(status_code=500, detail="Server configuration error") from e
    except InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e


def get_current_business_id(
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> str:
    """Resolve the business the user works for; all data access is scoped by it"""
    profile = db.query(Profile).filter(Profile.user_id == user.user_id).first()
    if not profile:
        logger.warning(f"User {user.user_id} has no business profile")
        raise HTTPException(
            status_code=403,
            detail="No business selected. Complete business setup to continue.",
        )
    return profile.business_id
