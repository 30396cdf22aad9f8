import pytest
from datetime import datetime, timedelta, UTC
from jose import jwt

from painel.core.exceptions import ExpiredTokenException, UnauthorizedException
from painel.core.security import (
    TokenCodec,
    TokenConfig,
    hash_password,
    verify_password,
)
from painel.models.role import UserRole
from painel.models.tenant_context import Principal

SECRET = "unit-test-secret"


@pytest.fixture
def codec():
    return TokenCodec(TokenConfig(secret_key=SECRET, expire_minutes=30))


@pytest.fixture
def manager():
    return Principal(
        id=12, email="ana@pizzaria.com", role=UserRole.MANAGER, tenant_id=7, display_name="Ana"
    )


def _encode(payload: dict, secret: str = SECRET) -> str:
    return jwt.encode(payload, secret, algorithm="HS256")


def _future() -> datetime:
    return datetime.now(UTC) + timedelta(minutes=15)


class TestTokenIssueVerify:
    def test_manager_identity_survives(self, codec, manager):
        principal = codec.verify(codec.issue(manager))

        assert principal == manager

    def test_admin_without_company(self, codec):
        admin = Principal(id=1, email="root@painel.com", role=UserRole.ADMIN, tenant_id=None)

        principal = codec.verify(codec.issue(admin))

        assert principal.is_admin()
        assert principal.tenant_id is None

    def test_claims_layout(self, codec, manager):
        """sub is the user id as a string; role is the enum value"""
        claims = jwt.decode(codec.issue(manager), SECRET, algorithms=["HS256"])

        assert claims["sub"] == "12"
        assert claims["role"] == "manager"
        assert claims["tenant_id"] == 7
        assert claims["email"] == "ana@pizzaria.com"
        assert claims["name"] == "Ana"
        assert claims["exp"] > claims["iat"]

    def test_default_lifetime_from_config(self, codec, manager):
        claims = jwt.decode(codec.issue(manager), SECRET, algorithms=["HS256"])

        assert claims["exp"] - claims["iat"] == 30 * 60

    def test_from_settings(self):
        class FakeSettings:
            SECRET_KEY = "abc"
            JWT_ALGORITHM = "HS256"
            ACCESS_TOKEN_EXPIRE_MINUTES = 5

        config = TokenConfig.from_settings(FakeSettings)

        assert config == TokenConfig(secret_key="abc", algorithm="HS256", expire_minutes=5)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class TestInjectedClock:
    """Issue and verify both follow the codec's own clock, not wall time"""

    @pytest.fixture
    def clock(self):
        return FakeClock(datetime.now(UTC) - timedelta(hours=2))

    @pytest.fixture
    def clocked_codec(self, clock):
        return TokenCodec(TokenConfig(secret_key=SECRET), clock=clock)

    def test_valid_until_ttl_elapses(self, clocked_codec, clock, manager):
        token = clocked_codec.issue(manager, ttl=timedelta(hours=1))

        assert clocked_codec.verify(token) == manager
        clock.advance(timedelta(minutes=59))
        assert clocked_codec.verify(token) == manager

    def test_expires_once_clock_passes_ttl(self, clocked_codec, clock, manager):
        token = clocked_codec.issue(manager, ttl=timedelta(hours=1))

        clock.advance(timedelta(hours=1, seconds=1))

        with pytest.raises(ExpiredTokenException):
            clocked_codec.verify(token)

    def test_no_leeway_at_exact_expiry(self, clocked_codec, clock, manager):
        token = clocked_codec.issue(manager, ttl=timedelta(minutes=10))

        clock.advance(timedelta(minutes=10))

        with pytest.raises(ExpiredTokenException):
            clocked_codec.verify(token)


class TestTokenRejection:
    def test_expired_token(self, codec, manager):
        token = codec.issue(manager, ttl=timedelta(seconds=-10))

        with pytest.raises(ExpiredTokenException):
            codec.verify(token)

    def test_expired_via_clock(self, manager):
        """A token issued by a clock two hours behind is already past expiry"""
        past = datetime.now(UTC) - timedelta(hours=2)
        issuer = TokenCodec(TokenConfig(secret_key=SECRET, expire_minutes=60), clock=lambda: past)
        verifier = TokenCodec(TokenConfig(secret_key=SECRET))

        with pytest.raises(ExpiredTokenException):
            verifier.verify(issuer.issue(manager))

    def test_non_numeric_exp(self, codec):
        token = _encode({"sub": "3", "role": "manager", "tenant_id": 7, "exp": "tomorrow"})

        with pytest.raises(UnauthorizedException):
            codec.verify(token)

    def test_expired_is_unauthorized(self):
        assert issubclass(ExpiredTokenException, UnauthorizedException)

    def test_wrong_signature(self, codec, manager):
        other = TokenCodec(TokenConfig(secret_key="another-secret"))

        with pytest.raises(UnauthorizedException) as exc_info:
            codec.verify(other.issue(manager))

        assert not isinstance(exc_info.value, ExpiredTokenException)

    def test_garbage_token(self, codec):
        with pytest.raises(UnauthorizedException):
            codec.verify("not-a-valid-jwt-token")

    def test_missing_exp(self, codec):
        token = _encode({"sub": "3", "role": "manager", "tenant_id": 7})

        with pytest.raises(UnauthorizedException, match="expiration"):
            codec.verify(token)

    def test_missing_sub(self, codec):
        token = _encode({"role": "manager", "tenant_id": 7, "exp": _future()})

        with pytest.raises(UnauthorizedException, match="user identifier"):
            codec.verify(token)

    def test_non_numeric_sub(self, codec):
        token = _encode({"sub": "abc", "role": "manager", "tenant_id": 7, "exp": _future()})

        with pytest.raises(UnauthorizedException, match="malformed"):
            codec.verify(token)

    def test_unknown_role(self, codec):
        token = _encode({"sub": "3", "role": "owner", "tenant_id": 7, "exp": _future()})

        with pytest.raises(UnauthorizedException, match="malformed"):
            codec.verify(token)

    def test_non_integer_company(self, codec):
        token = _encode({"sub": "3", "role": "manager", "tenant_id": "7", "exp": _future()})

        with pytest.raises(UnauthorizedException, match="malformed"):
            codec.verify(token)

    def test_manager_without_company(self, codec):
        token = _encode({"sub": "3", "role": "manager", "tenant_id": None, "exp": _future()})

        with pytest.raises(UnauthorizedException, match="company"):
            codec.verify(token)


class TestPasswordHashing:
    def test_hash_and_verify(self):
        hashed = hash_password("pizza123", rounds=4)

        assert hashed != "pizza123"
        assert verify_password("pizza123", hashed)
        assert not verify_password("pizza124", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same", rounds=4) != hash_password("same", rounds=4)

    def test_malformed_stored_hash(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False
