from unittest.mock import MagicMock

import redis

from pethub import rate_limiter
from pethub.rate_limiter import check_rate_limit


class TestMemoryWindow:
    def test_allows_up_to_limit(self):
        results = [check_rate_limit("user-1", limit=3, window_seconds=60, now=1000.0 + i) for i in range(4)]

        assert [allowed for allowed, _, _ in results] == [True, True, True, False]
        assert results[2][1] == 3

    def test_rejected_requests_are_not_recorded(self):
        for i in range(5):
            check_rate_limit("user-1", limit=2, window_seconds=60, now=1000.0 + i)

        # Window opened at 1000: the slot frees at 1060
        assert check_rate_limit("user-1", limit=2, window_seconds=60, now=1059.5)[0] is False
        assert check_rate_limit("user-1", limit=2, window_seconds=60, now=1060.0)[0] is True

    def test_retry_after(self):
        check_rate_limit("user-1", limit=1, window_seconds=60, now=1000.0)
        allowed, _, retry_after = check_rate_limit("user-1", limit=1, window_seconds=60, now=1015.0)
        assert not allowed
        assert retry_after == 45

    def test_keys_are_independent(self):
        assert check_rate_limit("user-1", limit=1, window_seconds=60, now=1000.0)[0]
        assert check_rate_limit("user-2", limit=1, window_seconds=60, now=1000.0)[0]
        assert not check_rate_limit("user-1", limit=1, window_seconds=60, now=1001.0)[0]

    def test_idle_windows_cleaned_up(self):
        check_rate_limit("idle", limit=5, window_seconds=60, now=1000.0)
        check_rate_limit("active", limit=5, window_seconds=60, now=1200.0)
        assert "idle" not in rate_limiter.memory_windows
        assert "active" in rate_limiter.memory_windows


class TestRedisStore:
    def test_uses_redis_when_available(self, monkeypatch):
        client = MagicMock()
        client.pipeline.return_value.execute.return_value = [0, 4]
        monkeypatch.setattr(rate_limiter, "get_redis_client", lambda: client)

        allowed, count, _ = check_rate_limit("user-1", limit=5, window_seconds=60, now=1000.0)

        assert allowed
        assert count == 5
        assert rate_limiter.memory_windows == {}

    def test_redis_limit_reached(self, monkeypatch):
        client = MagicMock()
        client.pipeline.return_value.execute.return_value = [0, 5]
        monkeypatch.setattr(rate_limiter, "get_redis_client", lambda: client)

        assert check_rate_limit("user-1", limit=5, window_seconds=60, now=1000.0) == (False, 5, 60)

    def test_redis_error_falls_back_to_memory(self, monkeypatch):
        client = MagicMock()
        client.pipeline.side_effect = redis.ConnectionError("down")
        monkeypatch.setattr(rate_limiter, "get_redis_client", lambda: client)

        assert check_rate_limit("user-1", limit=1, window_seconds=60, now=1000.0)[0]
        assert "user-1" in rate_limiter.memory_windows
