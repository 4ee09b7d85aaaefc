from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from paceon.database.store import StoreError
from paceon.schemas import UserProfile

JWT_SECRET = "test-jwt-secret"


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class StubStore:
    """In-memory profile store that records every call."""

    def __init__(self, profiles=None, roles=None, fail=False):
        self.profiles = {p.id: p for p in (profiles or [])}
        self.roles = dict(roles or {})
        self.fail = fail
        self.profile_calls = []
        self.role_calls = []

    async def fetch_profiles(self, user_ids):
        self.profile_calls.append(list(user_ids))
        if self.fail:
            raise StoreError("store unreachable")
        return [self.profiles[i] for i in user_ids if i in self.profiles]

    async def fetch_role(self, user_id):
        self.role_calls.append(user_id)
        if self.fail:
            raise StoreError("store unreachable")
        return self.roles.get(user_id)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def alice():
    return UserProfile(id="alice", display_name="Alice Tan", avatar_url="https://cdn.example/alice.png")


@pytest.fixture
def make_store():
    return StubStore


@pytest.fixture
def make_token():
    def _make(sub, secret=JWT_SECRET, audience="authenticated", expires_in=timedelta(minutes=5)):
        payload = {"sub": sub, "aud": audience, "exp": datetime.now(timezone.utc) + expires_in}
        return jwt.encode(payload, secret, algorithm="HS256")
    return _make


@pytest.fixture
def jwt_secret():
    return JWT_SECRET
