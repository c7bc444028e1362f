"""Tests for the per-run fetch cache and retry policy."""

import threading
import unittest
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock, patch

from image_versions._sources import FetchCache, RetryPolicy, fetch_with_retry
from image_versions._sources import retry as retry_module
from image_versions.exceptions import VersionFetchError


class TestFetchCache(unittest.TestCase):
    def test_fetches_once_per_key(self):
        cache = FetchCache()
        fetch = Mock(return_value=[1, 2, 3])

        self.assertEqual(cache.get_or_fetch("https://a", fetch), [1, 2, 3])
        self.assertEqual(cache.get_or_fetch("https://a", fetch), [1, 2, 3])

        fetch.assert_called_once()
        self.assertIn("https://a", cache)
        self.assertEqual(len(cache), 1)

    def test_keys_are_independent(self):
        cache = FetchCache()
        cache.get_or_fetch("https://a", lambda: "a")
        self.assertEqual(cache.get_or_fetch("https://b", lambda: "b"), "b")
        self.assertEqual(cache.snapshot(), {"https://a": "a", "https://b": "b"})

    def test_failure_is_shared(self):
        cache = FetchCache()
        fetch = Mock(side_effect=VersionFetchError("boom"))

        with self.assertRaises(VersionFetchError):
            cache.get_or_fetch("https://a", fetch)
        with self.assertRaises(VersionFetchError):
            cache.get_or_fetch("https://a", fetch)

        fetch.assert_called_once()
        self.assertEqual(cache.snapshot(), {})

    def test_concurrent_callers_share_in_flight_fetch(self):
        cache = FetchCache()
        started = threading.Event()
        release = threading.Event()
        calls = []

        def slow_fetch():
            calls.append(1)
            started.set()
            release.wait(timeout=5)
            return "data"

        with ThreadPoolExecutor(max_workers=4) as executor:
            first = executor.submit(cache.get_or_fetch, "https://a", slow_fetch)
            started.wait(timeout=5)
            others = [executor.submit(cache.get_or_fetch, "https://a", slow_fetch) for _ in range(3)]
            release.set()
            results = [first.result()] + [future.result() for future in others]

        self.assertEqual(results, ["data"] * 4)
        self.assertEqual(len(calls), 1)

    def test_clear(self):
        cache = FetchCache()
        cache.get_or_fetch("https://a", lambda: "a")
        cache.clear()
        self.assertNotIn("https://a", cache)


class TestRetryPolicy(unittest.TestCase):
    def test_exponential_delay_is_capped(self):
        policy = RetryPolicy(attempts=10, delay=1.0)
        self.assertEqual([policy.delay_for(n) for n in range(1, 7)], [1.0, 2.0, 4.0, 8.0, 16.0, 30.0])

    def test_invalid_settings(self):
        with self.assertRaises(ValueError):
            RetryPolicy(attempts=0)
        with self.assertRaises(ValueError):
            RetryPolicy(delay=-1)


class TestFetchWithRetry(unittest.TestCase):
    def test_returns_first_success(self):
        sleeper = Mock()
        fetch = Mock(side_effect=[VersionFetchError("1"), VersionFetchError("2"), "ok"])

        result = fetch_with_retry(fetch, RetryPolicy(attempts=3, delay=0.5), sleeper=sleeper)

        self.assertEqual(result, "ok")
        self.assertEqual([c.args[0] for c in sleeper.call_args_list], [0.5, 1.0])

    def test_reraises_last_error(self):
        sleeper = Mock()
        fetch = Mock(side_effect=[VersionFetchError("first"), VersionFetchError("last")])

        with self.assertRaises(VersionFetchError) as ctx:
            fetch_with_retry(fetch, RetryPolicy(attempts=2, delay=1.0), sleeper=sleeper)

        self.assertEqual(str(ctx.exception), "last")
        sleeper.assert_called_once_with(1.0)

    def test_logs_each_failed_attempt(self):
        fetch = Mock(side_effect=VersionFetchError("down"))
        with patch.object(retry_module, "logger") as mock_logger:
            with self.assertRaises(VersionFetchError):
                fetch_with_retry(fetch, RetryPolicy(attempts=2, delay=0), sleeper=Mock())
        self.assertEqual(mock_logger.warning.call_count, 2)
        self.assertIn("Fetch attempt 1/2 failed: down", mock_logger.warning.call_args_list[0].args[0])
