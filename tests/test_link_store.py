"""
Tests for the in-memory streaming link store.
"""
import threading
from datetime import timedelta

import pytest

from media_app.errors import LinkExpiredError, MediaAppError, NotFoundError
from media_app.links.link_id_strategies import LinkIdStrategy
from media_app.links.store import LinkStore


class FixedLinkIdStrategy(LinkIdStrategy):
    """Always returns the same ID, to force collisions"""

    def generate(self) -> str:
        return "same-id"


class TestIssueAndResolve:
    """Test issuing and redeeming links"""

    def test_resolve_returns_target(self, link_store):
        """A freshly issued link resolves to the original location"""
        link = link_store.issue(1, "https://cdn.example.com/a.mp4")

        resolved = link_store.resolve(link.link_id)

        assert resolved.target_location == "https://cdn.example.com/a.mp4"
        assert resolved.asset_id == 1

    def test_expiry_is_exactly_ttl(self, link_store, clock):
        link = link_store.issue(1, "https://cdn.example.com/a.mp4")

        assert link.issued_at == clock.now
        assert link.expires_at == clock.now + timedelta(minutes=10)

    def test_link_is_reusable_within_ttl(self, link_store, clock):
        """Redeeming does not invalidate the link before expiry"""
        link = link_store.issue(1, "https://cdn.example.com/a.mp4")

        link_store.resolve(link.link_id)
        clock.advance(minutes=9)
        assert link_store.resolve(link.link_id).link_id == link.link_id

    def test_single_use_consumes_link(self, link_store):
        link = link_store.issue(1, "https://cdn.example.com/a.mp4")

        link_store.resolve(link.link_id, consume=True)

        with pytest.raises(NotFoundError):
            link_store.resolve(link.link_id)

    def test_unknown_link_is_not_found(self, link_store):
        with pytest.raises(NotFoundError):
            link_store.resolve("does-not-exist")

    def test_expired_once_then_not_found(self, link_store, clock):
        """Past the TTL: Expired exactly once, NotFound afterwards"""
        link = link_store.issue(1, "https://cdn.example.com/a.mp4")
        clock.advance(minutes=10, seconds=1)

        with pytest.raises(LinkExpiredError):
            link_store.resolve(link.link_id)

        with pytest.raises(NotFoundError):
            link_store.resolve(link.link_id)

    def test_still_valid_at_exact_expiry(self, link_store, clock):
        link = link_store.issue(1, "https://cdn.example.com/a.mp4")
        clock.advance(minutes=10)

        assert link_store.resolve(link.link_id).link_id == link.link_id

    def test_distinct_ids(self, link_store):
        first = link_store.issue(1, "https://cdn.example.com/a.mp4")
        second = link_store.issue(1, "https://cdn.example.com/a.mp4")

        assert first.link_id != second.link_id
        assert len(link_store) == 2


class TestSweep:
    """Test passive cleanup of expired links"""

    def test_issue_sweeps_expired_links(self, link_store, clock):
        old = link_store.issue(1, "https://cdn.example.com/a.mp4")
        clock.advance(minutes=11)

        fresh = link_store.issue(2, "https://cdn.example.com/b.mp4")

        assert old.link_id not in link_store
        assert fresh.link_id in link_store
        assert len(link_store) == 1

    def test_swept_link_is_not_found(self, link_store, clock):
        """Once swept, a link reads as never having existed"""
        old = link_store.issue(1, "https://cdn.example.com/a.mp4")
        clock.advance(minutes=11)
        link_store.issue(2, "https://cdn.example.com/b.mp4")

        with pytest.raises(NotFoundError):
            link_store.resolve(old.link_id)

    def test_sweep_keeps_live_links(self, link_store, clock):
        link_store.issue(1, "https://cdn.example.com/a.mp4")
        clock.advance(minutes=5)
        live = link_store.issue(2, "https://cdn.example.com/b.mp4")
        clock.advance(minutes=6)

        assert link_store.sweep() == 1
        assert live.link_id in link_store

    def test_sweep_keeps_link_at_exact_expiry(self, link_store, clock):
        """A link is still valid at expires_at, so an issue at that instant keeps it"""
        first = link_store.issue(1, "https://cdn.example.com/a.mp4")
        clock.advance(minutes=10)

        link_store.issue(2, "https://cdn.example.com/b.mp4")

        assert first.link_id in link_store
        assert link_store.resolve(first.link_id).target_location == "https://cdn.example.com/a.mp4"


class TestCollisions:
    def test_gives_up_after_max_retries(self, clock):
        store = LinkStore(id_strategy=FixedLinkIdStrategy(), clock=clock, max_retries=3)
        store.issue(1, "https://cdn.example.com/a.mp4")

        with pytest.raises(MediaAppError):
            store.issue(1, "https://cdn.example.com/a.mp4")

        assert len(store) == 1

    def test_expired_id_can_be_reused(self, clock):
        """Sweeping runs before ID generation, freeing expired IDs"""
        store = LinkStore(id_strategy=FixedLinkIdStrategy(), clock=clock)
        store.issue(1, "https://cdn.example.com/a.mp4")
        clock.advance(minutes=11)

        link = store.issue(2, "https://cdn.example.com/b.mp4")

        assert store.resolve(link.link_id).asset_id == 2


class TestConcurrency:
    def test_concurrent_issue_and_resolve(self, link_store):
        """Many threads issuing at once get distinct, resolvable links"""
        links = []
        links_lock = threading.Lock()
        start = threading.Barrier(32)

        def worker(asset_id):
            start.wait()
            link = link_store.issue(asset_id, f"https://cdn.example.com/{asset_id}.mp4")
            assert link_store.resolve(link.link_id).asset_id == asset_id
            with links_lock:
                links.append(link)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(32)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(links) == 32
        assert len({link.link_id for link in links}) == 32
        for link in links:
            assert link_store.resolve(link.link_id).target_location == link.target_location
