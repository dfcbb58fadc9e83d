"""
Unit tests for ResetTokenStore

Runs against the in-memory repository with a controllable clock.
"""
from datetime import timedelta

import pytest

from src.app.services.reset_token_store import Found, NotFound, ResetTokenStore
from src.app.services.token_generator import TokenGenerator
from src.domain.base import utcnow
from tests.fixtures.in_memory_repositories import InMemoryPasswordResetRequestRepository


class FakeClock:
    def __init__(self):
        self.now = utcnow()

    def __call__(self):
        return self.now

    def advance(self, delta: timedelta):
        self.now += delta


@pytest.fixture
def repository():
    return InMemoryPasswordResetRequestRepository()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(repository, clock):
    return ResetTokenStore(repository, TokenGenerator(), clock=clock)


@pytest.mark.asyncio
async def test_issue_stores_fingerprint_only(store, repository, clock):
    secret = await store.issue("A@X.com")

    (row,) = repository.rows.values()
    assert row.email == "a@x.com"
    assert row.token_hash == TokenGenerator.fingerprint(secret)
    assert row.token_hash != secret
    assert row.consumed is False
    assert row.expires_at == clock.now + timedelta(hours=1)


@pytest.mark.asyncio
async def test_lookup_finds_live_request(store):
    secret = await store.issue("a@x.com")

    outcome = await store.lookup(secret)

    assert isinstance(outcome, Found)
    assert outcome.request.email == "a@x.com"


@pytest.mark.asyncio
async def test_second_issue_invalidates_first(store, repository):
    first = await store.issue("a@x.com")
    second = await store.issue("a@x.com")

    assert len(repository.rows) == 1
    assert isinstance(await store.lookup(first), NotFound)
    assert isinstance(await store.lookup(second), Found)


@pytest.mark.asyncio
async def test_issue_for_other_email_keeps_request(store):
    first = await store.issue("a@x.com")
    await store.issue("b@x.com")

    assert isinstance(await store.lookup(first), Found)


@pytest.mark.asyncio
async def test_expired_request_is_not_found(store, clock):
    secret = await store.issue("a@x.com")

    clock.advance(timedelta(hours=1))

    assert await store.lookup(secret) == await store.lookup("unknown-secret")


@pytest.mark.asyncio
async def test_consumed_request_is_not_found(store):
    secret = await store.issue("a@x.com")
    outcome = await store.lookup(secret)

    assert await store.consume(outcome.request.id) is True

    assert isinstance(await store.lookup(secret), NotFound)


@pytest.mark.asyncio
async def test_second_consume_is_a_noop(store, repository):
    secret = await store.issue("a@x.com")
    outcome = await store.lookup(secret)

    assert await store.consume(outcome.request.id) is True
    assert await store.consume(outcome.request.id) is False
    assert repository.rows[outcome.request.id].consumed is True


@pytest.mark.asyncio
async def test_consumed_request_stays_inert_after_new_clock(store, clock):
    secret = await store.issue("a@x.com")
    outcome = await store.lookup(secret)
    await store.consume(outcome.request.id)

    clock.advance(timedelta(minutes=-30))

    assert isinstance(await store.lookup(secret), NotFound)


@pytest.mark.asyncio
async def test_empty_secret_is_not_found(store):
    assert isinstance(await store.lookup(""), NotFound)
