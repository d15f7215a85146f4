import pytest

from app.infrastructure.cache import InMemoryCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_get_returns_stored_value():
    cache = InMemoryCache()
    await cache.set("calendar_JFK_LAX_7d", {"totalFlightsFound": 3}, ttl=60)

    assert await cache.get("calendar_JFK_LAX_7d") == {"totalFlightsFound": 3}
    assert await cache.get("calendar_JFK_SFO_7d") is None


@pytest.mark.asyncio
async def test_entry_expires_after_ttl():
    clock = FakeClock()
    cache = InMemoryCache(clock=clock)
    await cache.set("k", "v", ttl=3600)

    clock.now += 3599
    assert await cache.get("k") == "v"

    clock.now += 1
    assert await cache.get("k") is None
    assert cache.size == 0


@pytest.mark.asyncio
async def test_default_ttl_is_used_when_none_given():
    clock = FakeClock()
    cache = InMemoryCache(default_ttl=21600, clock=clock)
    await cache.set("k", "v")

    clock.now += 21599
    assert await cache.get("k") == "v"
    clock.now += 1
    assert await cache.get("k") is None


@pytest.mark.asyncio
async def test_set_overwrites_whole_entry_and_resets_ttl():
    clock = FakeClock()
    cache = InMemoryCache(clock=clock)
    await cache.set("k", {"a": 1}, ttl=10)
    clock.now += 8
    await cache.set("k", {"b": 2}, ttl=10)
    clock.now += 8

    assert await cache.get("k") == {"b": 2}


@pytest.mark.asyncio
async def test_delete_and_clear():
    cache = InMemoryCache()
    await cache.set("a", 1)
    await cache.set("b", 2)

    assert await cache.delete("a") is True
    assert await cache.delete("a") is False
    await cache.clear()
    assert cache.size == 0
