from loguru import logger
from sqlalchemy.orm import Session

from painel.models.user import User
from painel.models.tenant_context import Principal
from painel.repositories.user_repository import UserRepository
from painel.core.security import TokenCodec, hash_password, verify_password
from painel.core.exceptions import UnauthorizedException, NotFoundException

INVALID_CREDENTIALS = "Invalid email or password"

# Checked when the email is unknown so every failed login pays one bcrypt round
DUMMY_PASSWORD_HASH = hash_password("painel-unknown-user")


class AuthService:
    """Service for staff login and identity lookup"""

    def __init__(self, db: Session, codec: TokenCodec):
        self.db = db
        self.codec = codec
        self.user_repo = UserRepository(db)

    def login(self, email: str, password: str) -> tuple[str, User]:
        """
        Authenticate by email/password and issue an access token.

        Unknown email, inactive user and wrong password all produce the
        same error so callers cannot discover which emails exist.

        Returns:
            Tuple of (token, user)

        Raises:
            UnauthorizedException: If credentials are invalid
        """
        user = self.user_repo.get_active_by_email(email)
        password_hash = user.password_hash if user else DUMMY_PASSWORD_HASH
        if not verify_password(password, password_hash) or not user:
            logger.info("Failed login attempt for {}", email)
            raise UnauthorizedException(INVALID_CREDENTIALS)

        user = self.user_repo.touch_last_login(user)

        principal = Principal(
            id=user.id,
            email=user.email,
            role=user.role,
            tenant_id=user.tenant_id,
            display_name=user.name,
        )
        token = self.codec.issue(principal)
        logger.info("User {} logged in (role={}, tenant={})", user.id, user.role.value, user.tenant_id)
        return token, user

    def get_me(self, principal: Principal) -> User:
        """
        Load the stored record of the authenticated user.

        Raises:
            NotFoundException: If the user was deleted after the token was issued
        """
        user = self.user_repo.get_by_id(principal.id)
        if not user:
            raise NotFoundException("User not found")
        return user
