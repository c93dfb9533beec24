"""
Name: Authentication Service Tests

Responsibilities:
  - Login success issues a verifiable token
  - Unknown email and wrong password fail identically (no enumeration)
  - Unknown email still pays for one Argon2 verification
"""

from uuid import uuid4

import pytest
import pytest_asyncio

from hr_admin.crosscutting.exceptions import InternalError, UnauthorizedError
from hr_admin.domain.repositories import StoreError
from hr_admin.identity.auth_users import AuthenticationService
from hr_admin.identity.passwords import PasswordHasher
from hr_admin.identity.tokens import TokenCodec
from hr_admin.identity.users import User, UserRole

pytestmark = pytest.mark.unit


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(cost=10, memory_cost_kib=64)


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(secret="x" * 40, issuer="hr-admin-api", ttl_seconds=3600)


@pytest_asyncio.fixture
async def service(user_repo, hasher, codec) -> AuthenticationService:
    await user_repo.create(
        User(
            id=uuid4(),
            email="real@x.com",
            password_hash=hasher.hash("correct-password"),
            role=UserRole.ADMIN,
        )
    )
    return AuthenticationService(users=user_repo, hasher=hasher, codec=codec)


@pytest.mark.asyncio
async def test_login_returns_token_for_valid_credentials(service, codec):
    result = await service.login("real@x.com", "correct-password")

    claims = codec.verify(result.token)
    assert claims.subject == str(result.user.id)
    assert claims.email == "real@x.com"
    assert claims.role == "ADMIN"
    assert result.expires_in == 3600


@pytest.mark.asyncio
async def test_login_normalizes_email(service):
    result = await service.login("  REAL@X.com ", "correct-password")
    assert result.user.email == "real@x.com"


@pytest.mark.asyncio
async def test_unknown_email_and_wrong_password_are_indistinguishable(service):
    with pytest.raises(UnauthorizedError) as unknown:
        await service.login("unknown@x.com", "anything")
    with pytest.raises(UnauthorizedError) as wrong:
        await service.login("real@x.com", "wrongpassword")

    assert unknown.value.error_code == wrong.value.error_code == "UNAUTHORIZED"
    assert unknown.value.message == wrong.value.message == "Invalid email or password"


@pytest.mark.asyncio
async def test_validate_credentials_returns_none_on_mismatch(service):
    assert await service.validate_credentials("real@x.com", "nope") is None
    assert await service.validate_credentials("", "correct-password") is None
    user = await service.validate_credentials("real@x.com", "correct-password")
    assert user is not None and user.email == "real@x.com"


class _BrokenUsers:
    async def find_by_email(self, email):
        raise StoreError("connection refused")


@pytest.mark.asyncio
async def test_store_failure_surfaces_as_internal(hasher, codec):
    service = AuthenticationService(users=_BrokenUsers(), hasher=hasher, codec=codec)

    with pytest.raises(InternalError) as exc:
        await service.login("real@x.com", "pw")

    assert isinstance(exc.value.original_error, StoreError)
    assert exc.value.is_operational is False


class _CountingHasher(PasswordHasher):
    def __init__(self):
        super().__init__(cost=10, memory_cost_kib=64)
        self.compared_digests = []

    def compare(self, plaintext, digest):
        self.compared_digests.append(digest)
        return super().compare(plaintext, digest)


@pytest.mark.asyncio
async def test_unknown_email_still_runs_a_hash_comparison(user_repo, codec):
    hasher = _CountingHasher()
    service = AuthenticationService(users=user_repo, hasher=hasher, codec=codec)

    assert await service.validate_credentials("ghost@x.com", "anything") is None
    assert await service.validate_credentials("ghost2@x.com", "anything") is None

    assert hasher.compared_digests == [hasher.dummy_digest, hasher.dummy_digest]
