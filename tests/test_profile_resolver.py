import asyncio

from paceon.core.cache import TTLCache
from paceon.schemas import ResolutionSource, UserProfile
from paceon.services.profiles import ProfileResolver


def _resolver(store, clock, ttl=300):
    return ProfileResolver(TTLCache(ttl_seconds=ttl, name="profiles", clock=clock), store)


def test_empty_input_returns_empty_mapping(make_store, clock):
    store = make_store()
    assert asyncio.run(_resolver(store, clock).resolve([])) == {}
    assert store.profile_calls == []


def test_missing_id_gets_placeholder(make_store, clock, alice):
    store = make_store(profiles=[alice])
    result = asyncio.run(_resolver(store, clock).resolve(["alice", "bob"]))
    assert result["alice"] == alice
    assert result["bob"] == UserProfile(id="bob", display_name="Unknown User", avatar_url=None)


def test_duplicates_are_fetched_once(make_store, clock, alice):
    store = make_store(profiles=[alice])
    result = asyncio.run(_resolver(store, clock).resolve(["alice", "alice", "bob", "alice"]))
    assert list(result) == ["alice", "bob"]
    assert store.profile_calls == [["alice", "bob"]]


def test_second_call_within_ttl_is_a_cache_hit(make_store, clock, alice):
    store = make_store(profiles=[alice])
    resolver = _resolver(store, clock)

    async def run():
        first = await resolver.resolve(["alice", "bob"])
        second = await resolver.resolve(["bob", "alice"])
        return first, second

    first, second = asyncio.run(run())
    assert first == second
    assert len(store.profile_calls) == 1


def test_only_uncached_ids_are_fetched(make_store, clock, alice):
    carol = UserProfile(id="carol", display_name="Carol")
    store = make_store(profiles=[alice, carol])
    resolver = _resolver(store, clock)

    async def run():
        await resolver.resolve(["alice"])
        return await resolver.resolve(["alice", "carol"])

    result = asyncio.run(run())
    assert result["carol"] == carol
    assert store.profile_calls == [["alice"], ["carol"]]


def test_expired_entries_are_refetched(make_store, clock, alice):
    store = make_store(profiles=[alice])
    resolver = _resolver(store, clock, ttl=60)

    async def run():
        await resolver.resolve(["alice"])
        clock.advance(61)
        await resolver.resolve(["alice"])

    asyncio.run(run())
    assert len(store.profile_calls) == 2


def test_store_failure_falls_back_for_every_uncached_id(make_store, clock):
    store = make_store(fail=True)
    resolved = asyncio.run(_resolver(store, clock).resolve_detailed(["x", "y"]))
    assert set(resolved) == {"x", "y"}
    for user_id, entry in resolved.items():
        assert entry.is_fallback
        assert entry.value.id == user_id
        assert entry.value.display_name == "Unknown User"


def test_detailed_result_tags_source_and_cache_hits(make_store, clock, alice):
    store = make_store(profiles=[alice])
    resolver = _resolver(store, clock)

    async def run():
        first = await resolver.resolve_detailed(["alice", "ghost"])
        second = await resolver.resolve_detailed(["alice", "ghost"])
        return first, second

    first, second = asyncio.run(run())
    assert first["alice"].source is ResolutionSource.STORE and not first["alice"].cached
    assert first["ghost"].source is ResolutionSource.FALLBACK
    assert second["alice"].cached and second["alice"].source is ResolutionSource.STORE
    assert second["ghost"].cached and second["ghost"].is_fallback
