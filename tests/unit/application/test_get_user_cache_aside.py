"""
Name: GetUserById Cache-Aside Tests

Responsibilities:
  - Cache hit does not touch the store
  - Miss populates the cache with the configured TTL
  - NOT_FOUND results are not cached
  - Disabled / failing cache degrades to direct store reads
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from cleanauth.application.usecases import GetUserByIdUseCase, UserErrorCode
from cleanauth.application.usecases.users import user_cache_key
from cleanauth.domain.entities import User
from cleanauth.infrastructure.cache import InMemoryCache, NullCache

pytestmark = pytest.mark.unit


class MonotonicClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


async def _seed(repository) -> User:
    user = User.create(
        email="a@x.com", first_name="Ana", last_name="Lopez", password_hash="h"
    )
    await repository.add(user)
    return user


@pytest.mark.asyncio
async def test_second_read_is_served_from_cache(user_repository):
    user = await _seed(user_repository)
    use_case = GetUserByIdUseCase(user_repository, InMemoryCache(), ttl_seconds=900)

    first = await use_case.execute(user.id)
    reads_after_first = user_repository.read_count
    second = await use_case.execute(user.id)

    assert first.user == second.user
    assert reads_after_first == 1
    assert user_repository.read_count == 1


@pytest.mark.asyncio
async def test_miss_writes_read_model_with_ttl(user_repository):
    user = await _seed(user_repository)
    cache = AsyncMock()
    cache.get.return_value = None
    use_case = GetUserByIdUseCase(user_repository, cache, ttl_seconds=900)

    result = await use_case.execute(user.id)

    cache.set.assert_awaited_once_with(
        user_cache_key(user.id), result.user.to_dict(), 900
    )
    assert "password_hash" not in cache.set.await_args.args[1]


@pytest.mark.asyncio
async def test_entry_expires_after_ttl(user_repository):
    user = await _seed(user_repository)
    clock = MonotonicClock()
    use_case = GetUserByIdUseCase(
        user_repository, InMemoryCache(clock=clock), ttl_seconds=900
    )

    await use_case.execute(user.id)
    clock.now += 899
    await use_case.execute(user.id)
    assert user_repository.read_count == 1

    clock.now += 1
    await use_case.execute(user.id)
    assert user_repository.read_count == 2


@pytest.mark.asyncio
async def test_not_found_is_not_cached(user_repository):
    cache = InMemoryCache()
    missing = uuid4()
    use_case = GetUserByIdUseCase(user_repository, cache)

    result = await use_case.execute(missing)

    assert result.error.code == UserErrorCode.NOT_FOUND
    assert await cache.get(user_cache_key(missing)) is None


@pytest.mark.asyncio
async def test_corrupt_entry_falls_back_to_store(user_repository):
    user = await _seed(user_repository)
    cache = InMemoryCache()
    await cache.set(user_cache_key(user.id), {"unexpected": True}, 900)
    use_case = GetUserByIdUseCase(user_repository, cache)

    result = await use_case.execute(user.id)

    assert result.user.id == user.id
    assert user_repository.read_count == 1
    assert (await cache.get(user_cache_key(user.id)))["id"] == str(user.id)


@pytest.mark.asyncio
async def test_null_cache_always_reads_store(user_repository):
    user = await _seed(user_repository)
    use_case = GetUserByIdUseCase(user_repository, NullCache())

    await use_case.execute(user.id)
    await use_case.execute(user.id)

    assert user_repository.read_count == 2


def test_cache_key_format():
    user_id = uuid4()

    assert user_cache_key(user_id) == f"user:{user_id}"
