"""Unit tests for the in-memory rate limit store."""

from moviemate.api.middleware.rate_limit import InMemoryRateLimitStore


class FakeMonotonic:
    def __init__(self):
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value


class TestInMemoryRateLimitStore:

    def test_allows_up_to_limit(self):
        store = InMemoryRateLimitStore(clock=FakeMonotonic())

        assert [store.check_and_incr("auth", "1.2.3.4", 3, 60) for _ in range(4)] == [True, True, True, False]

    def test_window_resets(self):
        clock = FakeMonotonic()
        store = InMemoryRateLimitStore(clock=clock)
        for _ in range(2):
            store.check_and_incr("chat", "1.2.3.4", 2, 60)

        assert store.check_and_incr("chat", "1.2.3.4", 2, 60) is False
        clock.value += 60
        assert store.check_and_incr("chat", "1.2.3.4", 2, 60) is True

    def test_scopes_and_clients_are_independent(self):
        store = InMemoryRateLimitStore(clock=FakeMonotonic())
        store.check_and_incr("auth", "1.2.3.4", 1, 60)

        assert store.check_and_incr("auth", "5.6.7.8", 1, 60) is True
        assert store.check_and_incr("chat", "1.2.3.4", 1, 60) is True
        assert store.check_and_incr("auth", "1.2.3.4", 1, 60) is False

    def test_cleanup_drops_stale_entries(self):
        clock = FakeMonotonic()
        store = InMemoryRateLimitStore(clock=clock)
        store.check_and_incr("auth", "1.2.3.4", 5, 60)
        clock.value += 500

        store.cleanup_old(max_age_seconds=120)

        assert len(store) == 0
