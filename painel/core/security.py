from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC

import bcrypt
from jose import JWTError, jwt

from painel.core.exceptions import ExpiredTokenException, UnauthorizedException
from painel.models.role import UserRole
from painel.models.tenant_context import Principal


@dataclass(frozen=True)
class TokenConfig:
    """Signing parameters for the token codec."""

    secret_key: str
    algorithm: str = "HS256"
    expire_minutes: int = 60 * 24 * 7

    @classmethod
    def from_settings(cls, settings) -> "TokenConfig":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )


class TokenCodec:
    """
    Issues and verifies signed access tokens carrying a Principal.

    Claims: sub (user id), email, role, tenant_id, name, iat, exp.
    Tokens are never stored server-side; expiry is the only invalidation.
    """

    def __init__(self, config: TokenConfig, clock: Callable[[], datetime] | None = None):
        self.config = config
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue(self, principal: Principal, ttl: timedelta | None = None) -> str:
        """
        Encode principal into a signed JWT.

        Args:
            principal: Identity to embed
            ttl: Lifetime of the token (defaults to config.expire_minutes)

        Returns:
            Encoded JWT token
        """
        now = self._clock()
        if ttl is None:
            ttl = timedelta(minutes=self.config.expire_minutes)

        payload = {
            "sub": str(principal.id),
            "email": principal.email,
            "role": principal.role.value,
            "tenant_id": principal.tenant_id,
            "name": principal.display_name,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, self.config.secret_key, algorithm=self.config.algorithm)

    def verify(self, token: str) -> Principal:
        """
        Decode and validate JWT token.

        Args:
            token: JWT access token from Authorization header

        Returns:
            Principal embedded in the token

        Raises:
            ExpiredTokenException: If token is past its expiration
            UnauthorizedException: If token invalid or malformed
        """
        # Expiry is checked against our own clock below
        try:
            payload = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise UnauthorizedException(f"Invalid token: {str(e)}")

        exp = payload.get("exp")
        if exp is None:
            raise UnauthorizedException("Token missing expiration")
        if not isinstance(exp, (int, float)):
            raise UnauthorizedException("Token has malformed expiration")
        if self._clock().timestamp() >= exp:
            raise ExpiredTokenException("Token expired")

        return self._principal_from_claims(payload)

    @staticmethod
    def _principal_from_claims(payload: dict) -> Principal:
        sub = payload.get("sub")
        if sub is None:
            raise UnauthorizedException("Token missing user identifier")

        try:
            user_id = int(sub)
            role = UserRole(payload.get("role"))
        except (TypeError, ValueError):
            raise UnauthorizedException("Token has malformed identity claims")

        tenant_id = payload.get("tenant_id")
        if tenant_id is not None and not isinstance(tenant_id, int):
            raise UnauthorizedException("Token has malformed identity claims")
        if role != UserRole.ADMIN and tenant_id is None:
            raise UnauthorizedException("Token missing company for non-admin user")

        return Principal(
            id=user_id,
            email=payload.get("email") or "",
            role=role,
            tenant_id=tenant_id,
            display_name=payload.get("name") or "",
        )


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt"""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash"""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash or password over bcrypt's 72-byte limit
        return False
