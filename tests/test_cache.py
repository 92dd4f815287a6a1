"""
Unit tests for the file cache
"""

import os
import json
import time
import pytest
from datetime import datetime, timedelta

from prcheck.cache import CacheKey, CacheManager, PULLS, REVIEWS


class TestCacheKey:
    """Test cases for cache key generation."""

    def test_same_request_same_key(self):
        """Test that identical requests resolve to the same file."""
        assert CacheKey(PULLS, 'Ada-C11', 'repo').filename == CacheKey(PULLS, 'Ada-C11', 'repo').filename

    def test_kind_distinguishes_keys(self):
        """Test that pulls and reviews never share a file."""
        assert CacheKey(PULLS, 'Ada-C11', 'repo').filename != CacheKey(REVIEWS, 'Ada-C11', 'repo', 1).filename

    def test_underscored_repo_does_not_collide_with_pull_id(self):
        """Test that repo 'a_1' pull 2 and repo 'a' pull 12 get different files."""
        key1 = CacheKey(REVIEWS, 'Ada-C11', 'a_1', 2)
        key2 = CacheKey(REVIEWS, 'Ada-C11', 'a', 12)
        key3 = CacheKey(REVIEWS, 'Ada-C11', 'a_12', 1)

        assert len({key1.filename, key2.filename, key3.filename}) == 3

    def test_filename_encodes_all_parts(self):
        """Test that the file name contains kind, org, repo and pull ID."""
        assert CacheKey(REVIEWS, 'Ada-C11', 'repo_1', 7).filename == 'reviews.Ada-C11.repo_1.7.json'
        assert CacheKey(PULLS, 'Ada-C11', 'repo_1').filename == 'pulls.Ada-C11.repo_1.json'


class TestCacheGetPut:
    """Test cases for basic cache operations."""

    @pytest.fixture
    def cache_dir(self, tmp_path):
        return str(tmp_path / 'cache')

    @pytest.fixture
    def cache(self, cache_dir):
        return CacheManager(cache_dir)

    @pytest.fixture
    def key(self):
        return CacheKey(PULLS, 'Ada-C11', 'repo')

    def test_get_missing_entry_is_miss(self, cache, key):
        """Test that a missing entry returns None instead of raising."""
        assert cache.get(key, datetime.now() - timedelta(hours=1)) is None

    def test_put_then_get_round_trip(self, cache, key):
        """Test that a fresh entry returns the stored payload."""
        payload = [{'number': 1, 'user': {'login': 'target_user'}}]

        cache.put(key, payload)
        assert cache.get(key, datetime.now() - timedelta(seconds=5)) == payload

    def test_put_overwrites_previous_payload(self, cache, key):
        """Test that only the latest payload is retrievable."""
        cache.put(key, [{'number': 1}])
        cache.put(key, [{'number': 2}])

        assert cache.get(key, datetime.now() - timedelta(minutes=1)) == [{'number': 2}]

    def test_put_creates_cache_dir_lazily(self, cache, cache_dir, key):
        """Test that the cache directory only appears on first write."""
        assert not os.path.exists(cache_dir)
        cache.get(key, datetime.now())
        assert not os.path.exists(cache_dir)

        cache.put(key, [])
        assert os.path.isdir(cache_dir)

    def test_put_into_existing_dir(self, tmp_path, key):
        """Test that an existing cache directory is reused."""
        cache = CacheManager(str(tmp_path))
        cache.put(key, [1, 2])

        with open(tmp_path / key.filename) as f:
            assert json.load(f) == [1, 2]

    def test_cache_dir_creation_logged_once(self, cache, caplog):
        """Test that creating the cache directory is logged a single time."""
        with caplog.at_level('INFO'):
            cache.put(CacheKey(PULLS, 'Ada-C11', 'repo_1'), [])
            cache.put(CacheKey(PULLS, 'Ada-C11', 'repo_2'), [])

        messages = [r.message for r in caplog.records if 'Cache directory missing' in r.message]
        assert len(messages) == 1

    def test_no_temp_files_left_behind(self, cache, cache_dir, key):
        """Test that writes leave only the final cache file."""
        cache.put(key, [{'state': 'APPROVED'}])
        assert os.listdir(cache_dir) == [key.filename]

    def test_contains(self, cache, key):
        """Test membership regardless of age."""
        assert key not in cache
        cache.put(key, [])
        assert key in cache


class TestCacheFreshness:
    """Test cache freshness against the caller's cutoff."""

    @pytest.fixture
    def cache(self, tmp_path):
        return CacheManager(str(tmp_path))

    @pytest.fixture
    def key(self):
        return CacheKey(REVIEWS, 'Ada-C11', 'repo', 1)

    def _set_mtime(self, cache, key, when: datetime):
        ts = when.timestamp()
        os.utime(cache.path_for(key), (ts, ts))

    def test_day_old_entry_stale_for_one_hour_cutoff(self, cache, key):
        """Test that a day-old entry is a miss when the cutoff is an hour ago."""
        now = datetime.now()
        cache.put(key, [{'state': 'APPROVED'}])
        self._set_mtime(cache, key, now - timedelta(days=1))

        assert cache.get(key, now - timedelta(hours=1)) is None

    def test_day_old_entry_fresh_for_two_day_cutoff(self, cache, key):
        """Test that the same entry is a hit with a more lenient cutoff."""
        now = datetime.now()
        cache.put(key, [{'state': 'APPROVED'}])
        self._set_mtime(cache, key, now - timedelta(days=1))

        assert cache.get(key, now - timedelta(days=2)) == [{'state': 'APPROVED'}]

    def test_mtime_equal_to_cutoff_is_stale(self, cache, key):
        """Test that freshness requires an mtime strictly after the cutoff."""
        cutoff = datetime.now().replace(microsecond=0) - timedelta(minutes=10)
        cache.put(key, [])
        self._set_mtime(cache, key, cutoff)

        assert cache.get(key, cutoff) is None
        assert cache.get(key, cutoff - timedelta(seconds=1)) == []

    def test_cutoff_as_timestamp(self, cache, key):
        """Test that a POSIX timestamp cutoff works like a datetime."""
        cache.put(key, [{'state': 'COMMENTED'}])

        assert cache.get(key, time.time() - 60) == [{'state': 'COMMENTED'}]
        assert cache.get(key, time.time() + 60) is None

    def test_corrupt_file_is_miss(self, cache, key):
        """Test that an unreadable cache file is treated as a miss."""
        cache.put(key, [])
        with open(cache.path_for(key), 'w') as f:
            f.write('{not json')

        assert cache.get(key, datetime.now() - timedelta(hours=1)) is None


class TestCacheDisabled:
    """Test cache behaviour when caching is turned off."""

    def test_put_is_noop(self, tmp_path):
        cache_dir = tmp_path / 'cache'
        cache = CacheManager(str(cache_dir), use_cache=False)

        cache.put(CacheKey(PULLS, 'Ada-C11', 'repo'), [{'number': 1}])

        assert not cache_dir.exists()

    def test_get_always_misses(self, tmp_path):
        key = CacheKey(PULLS, 'Ada-C11', 'repo')
        CacheManager(str(tmp_path)).put(key, [{'number': 1}])

        cache = CacheManager(str(tmp_path), use_cache=False)
        assert cache.get(key, datetime.now() - timedelta(days=1)) is None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
