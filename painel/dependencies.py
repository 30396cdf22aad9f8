from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from painel.config import settings
from painel.core.security import TokenCodec, TokenConfig
from painel.core.exceptions import MissingCredentialException
from painel.models.tenant_context import Principal

# auto_error=False so a missing header is reported as 401 by our own handler
security = HTTPBearer(auto_error=False)


@lru_cache
def get_token_codec() -> TokenCodec:
    """Process-wide token codec built from settings"""
    return TokenCodec(TokenConfig.from_settings(settings))


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    codec: TokenCodec = Depends(get_token_codec),
) -> Principal:
    """
    FastAPI dependency resolving the authenticated Principal.

    Flow:
    1. Extract token from Authorization: Bearer <token>
    2. Verify signature and expiry with the token codec
    3. Return the Principal embedded in the token

    No database lookup happens here: the token is the source of truth for
    identity, role and company until it expires.

    Raises:
        MissingCredentialException: If no bearer token was sent
        UnauthorizedException: If token invalid
        ExpiredTokenException: If token expired
    """
    if credentials is None:
        raise MissingCredentialException("Access denied. No token provided.")
    return codec.verify(credentials.credentials)
