"""Tests for the shared Redis client."""

import asyncio

import pytest
from fakeredis.aioredis import FakeRedis

import config.cache as cache
from config.settings import settings
from util.enums import StoreBackend


@pytest.fixture(autouse=True)
def _reset_client(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cache, "_client", None)


def test_memory_backend_refuses_implicit_redis() -> None:
    assert settings.STORE_BACKEND == StoreBackend.MEMORY
    with pytest.raises(RuntimeError, match="STORE_BACKEND=memory"):
        asyncio.run(cache.get_redis())


def test_explicit_url_connects_once(monkeypatch: pytest.MonkeyPatch) -> None:
    urls: list[str] = []

    def fake_from_url(url: str, **kwargs: object) -> FakeRedis:
        urls.append(url)
        assert kwargs["decode_responses"] is False
        return FakeRedis()

    monkeypatch.setattr(cache, "from_url", fake_from_url)

    async def scenario() -> None:
        first = await cache.get_redis("redis://cache.internal:6380/2")
        assert await cache.get_redis() is first
        await cache.close_redis()
        assert cache._client is None

    asyncio.run(scenario())
    assert urls == ["redis://cache.internal:6380/2"]


def test_redis_backend_uses_settings_url(monkeypatch: pytest.MonkeyPatch) -> None:
    urls: list[str] = []
    monkeypatch.setattr(settings, "STORE_BACKEND", StoreBackend.REDIS)
    monkeypatch.setattr(cache, "from_url", lambda url, **_: urls.append(url) or FakeRedis())

    async def scenario() -> None:
        await cache.get_redis()
        await cache.close_redis()

    asyncio.run(scenario())
    assert urls == [settings.REDIS_URL]
