from scenario_content.utils.cache import TTLCache


class FakeClockCache(TTLCache):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.now = 1000.0

    def _now(self) -> float:
        return self.now


def test_get_and_expiry():
    cache = FakeClockCache(default_ttl_seconds=10)
    cache.set("a", 1)
    assert cache.get("a") == (1, 10)
    cache.now += 4
    assert cache.get("a") == (1, 6)
    cache.now += 6
    assert cache.get("a") is None
    assert len(cache) == 0


def test_get_or_load_calls_loader_once():
    cache = FakeClockCache(default_ttl_seconds=10)
    calls = []

    def loader():
        calls.append(1)
        return {"templates": {}}

    assert cache.get_or_load("k", loader) == {"templates": {}}
    assert cache.get_or_load("k", loader) == {"templates": {}}
    assert len(calls) == 1

    cache.invalidate("k")
    cache.get_or_load("k", loader)
    assert len(calls) == 2


def test_eviction_drops_entry_closest_to_expiry():
    cache = FakeClockCache(default_ttl_seconds=100, max_items=2)
    cache.set("short", 1, ttl_seconds=5)
    cache.set("long", 2)
    cache.set("new", 3)
    assert cache.get("short") is None
    assert cache.get("long") == (2, 100)
    assert cache.get("new") == (3, 100)


def test_invalidate_all():
    cache = FakeClockCache()
    cache.set("a", 1)
    cache.set("b", 2)
    cache.invalidate()
    assert len(cache) == 0
