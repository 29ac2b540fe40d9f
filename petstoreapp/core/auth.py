"""
Sign-in claims for the Pet Store front end
Reads the ID token issued by the identity provider and exposes its claims

The sign-in flow itself happens upstream; by the time a request reaches us
the browser either carries a bearer ID token or it doesn't.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Security scheme for bearer tokens
security = HTTPBearer(auto_error=False)

JWT_ALGORITHM = "HS256"


class TokenClaims(BaseModel):
    """Claims of a signed-in user"""
    name: Optional[str] = None
    email: Optional[str] = None
    grant_type: List[str] = []
    raw: Dict[str, Any] = {}


def decode_id_token(token: str, secret: str) -> Dict[str, Any]:
    """
    Decode and validate an ID token.

    Expected payload (B2C style):
    {
        "name": "Jane",
        "emails": ["jane@example.com"],
        "sub": "user_id",
        "roles": ["customer"],
        "exp": 1234567890
    }

    Raises:
        JWTError if the token is invalid or expired
    """
    return jwt.decode(
        token,
        secret,
        algorithms=[JWT_ALGORITHM],
        options={"verify_aud": False}
    )


def claims_from_payload(payload: Dict[str, Any]) -> TokenClaims:
    """Map a decoded ID token onto TokenClaims"""
    email = None
    emails = payload.get("emails")
    if isinstance(emails, str):
        emails = [emails]
    if isinstance(emails, list) and emails and isinstance(emails[0], str):
        email = emails[0]
    else:
        logger.warning(
            f"PetStoreApp {payload.get('name')} logged in, however cannot get email associated: "
            f"emails={emails!r}"
        )

    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]

    return TokenClaims(
        name=payload.get("name"),
        email=email,
        grant_type=list(roles),
        raw=payload,
    )


async def get_token_claims_optional(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[TokenClaims]:
    """
    Optional sign-in - returns None if no valid token provided.

    Usage:
        @router.get("/cart")
        async def cart(claims: Optional[TokenClaims] = Depends(get_token_claims_optional)):
            if claims:
                ...
    """
    if not credentials:
        return None

    secret = request.app.state.settings.AUTH_SECRET
    if not secret:
        logger.warning("Bearer token received but AUTH_SECRET is not set, treating request as anonymous")
        return None

    try:
        payload = decode_id_token(credentials.credentials, secret)
    except JWTError as e:
        logger.warning(f"Invalid ID token, treating request as anonymous: {e}")
        return None

    return claims_from_payload(payload)
