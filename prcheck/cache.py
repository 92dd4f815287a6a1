"""File cache for GitHub API responses with caller-driven freshness."""

import os
import json
import logging
import tempfile
from datetime import datetime
from typing import Any, NamedTuple, Optional, Union

PULLS = 'pulls'
REVIEWS = 'reviews'


class CacheKey(NamedTuple):
    """Identifies one cached API response.

    Components are joined with '.', which no validated org, repo or pull ID
    can contain, so two distinct keys never map to the same file.
    """
    kind: str
    org: str
    repo: str
    pull_id: Optional[int] = None

    @property
    def filename(self) -> str:
        parts = [self.kind, self.org, self.repo]
        if self.pull_id is not None:
            parts.append(str(self.pull_id))
        return '.'.join(parts) + '.json'


def _as_timestamp(moment: Union[datetime, float, int]) -> float:
    if isinstance(moment, datetime):
        return moment.timestamp()
    return float(moment)


class CacheManager:
    """Stores one JSON file per cache key in a cache directory.

    An entry is fresh when its modification time is strictly after the
    cutoff the caller passes to get(); entries never expire on their own and
    are only replaced by a later put() for the same key.
    """

    def __init__(self, cache_dir: str = '.prcheck_cache', use_cache: bool = True):
        """Initialize the cache manager.

        Args:
            cache_dir: Directory holding the cache files, created on first write
            use_cache: Whether caching is enabled
        """
        self.cache_dir = cache_dir
        self.use_cache = use_cache
        self._dir_ready = False

    def path_for(self, key: CacheKey) -> str:
        return os.path.join(self.cache_dir, key.filename)

    def get(self, key: CacheKey, min_fresh_time: Union[datetime, float, int]) -> Optional[Any]:
        """Get a cached payload if it was written after min_fresh_time.

        Args:
            key: The cache key to look up
            min_fresh_time: Oldest acceptable modification time (datetime or POSIX timestamp)

        Returns:
            The decoded JSON payload on a hit, None on a miss
        """
        if not self.use_cache:
            return None

        path = self.path_for(key)
        try:
            mtime = os.stat(path).st_mtime
        except FileNotFoundError:
            logging.debug(f"Cache miss for {key.filename} (no entry)")
            return None

        if not mtime > _as_timestamp(min_fresh_time):
            logging.debug(f"Cache miss for {key.filename} (stale)")
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            logging.warning(f"Ignoring unreadable cache file {path}: {e}")
            return None

        age_minutes = (datetime.now().timestamp() - mtime) / 60
        logging.debug(f"Using cached {key.filename} (age: {age_minutes:.1f} minutes)")
        return payload

    def put(self, key: CacheKey, payload: Any):
        """Store a payload, replacing any earlier entry for the same key.

        Args:
            key: The cache key
            payload: JSON-serializable data to cache
        """
        if not self.use_cache:
            return

        self._ensure_cache_dir()
        path = self.path_for(key)

        # Write to a temp file in the same directory, then rename over the old entry
        fd, tmp_path = tempfile.mkstemp(dir=self.cache_dir, prefix='.tmp_', suffix='.json')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(payload, f)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        logging.debug(f"Cached {key.filename}")

    def __contains__(self, key: CacheKey) -> bool:
        """Check if an entry exists for the key, regardless of its age."""
        return os.path.exists(self.path_for(key))

    def _ensure_cache_dir(self):
        if self._dir_ready:
            return
        if not os.path.isdir(self.cache_dir):
            logging.info(f"Cache directory missing; creating {self.cache_dir}")
            os.makedirs(self.cache_dir, exist_ok=True)
        self._dir_ready = True
