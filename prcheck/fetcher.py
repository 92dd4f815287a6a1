"""Cache-aware reads of pull requests and reviews."""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Union

from .api_client import GitHubAPIClient
from .cache import CacheKey, CacheManager, PULLS, REVIEWS
from .models import PullRequest, Review
from .validators import (
    DEFAULT_ORG_PREFIX,
    validate_org_name,
    validate_repo_name,
    validate_pull_id,
    validate_auth_token,
)

PULLS_PER_PAGE = 100


class GitHubFetcher:
    """Serves pulls and reviews from the file cache, falling back to GitHub on a miss."""

    def __init__(self, api_client: GitHubAPIClient, cache_manager: CacheManager,
                 org_prefix: str = DEFAULT_ORG_PREFIX):
        """Initialize the fetcher.

        Args:
            api_client: Client used for live requests
            cache_manager: Cache consulted before, and filled after, every live request
            org_prefix: Institutional prefix org names are validated against
        """
        self.api_client = api_client
        self.cache_manager = cache_manager
        self.org_prefix = org_prefix

    async def get_pulls(self, org: str, repo: str,
                        min_fresh_time: Union[datetime, float]) -> List[PullRequest]:
        """Get the first page (up to 100) of pull requests for a repository.

        Args:
            org: GitHub organization
            repo: Repository name
            min_fresh_time: Cached data older than this is refetched

        Returns:
            List of pull requests in API order
        """
        validate_org_name(org, self.org_prefix)
        validate_repo_name(repo)
        validate_auth_token(self.api_client.token)

        key = CacheKey(PULLS, org, repo)
        url = self.api_client.pulls_url(org, repo)
        data = await self._cached_get(key, url, min_fresh_time, {'per_page': PULLS_PER_PAGE})
        return [PullRequest.from_api(pr) for pr in data]

    async def get_reviews(self, org: str, repo: str, pull_id: Union[int, str],
                          min_fresh_time: Union[datetime, float]) -> List[Review]:
        """Get the reviews of one pull request, in API order."""
        validate_org_name(org, self.org_prefix)
        validate_repo_name(repo)
        pull_id = validate_pull_id(pull_id)
        validate_auth_token(self.api_client.token)

        key = CacheKey(REVIEWS, org, repo, pull_id)
        url = self.api_client.reviews_url(org, repo, pull_id)
        data = await self._cached_get(key, url, min_fresh_time)
        return [Review.from_api(review) for review in data]

    async def _cached_get(self, key: CacheKey, url: str, min_fresh_time: Union[datetime, float],
                          params: Dict = None) -> Any:
        cached_data = self.cache_manager.get(key, min_fresh_time)
        if cached_data is not None:
            logging.debug(f"Cache hit for {url}")
            return cached_data

        logging.info(f"Fetching {url}")
        # requests is blocking; keep the event loop free for the other fetches
        data = await asyncio.to_thread(self.api_client.get_json, url, params)

        self.cache_manager.put(key, data)
        return data
