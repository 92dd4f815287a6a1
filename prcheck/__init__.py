"""prcheck - check GitHub pull request review status for student repositories."""

from .models import PullRequest, Review
from .api_client import GitHubAPIClient
from .cache import CacheKey, CacheManager
from .config import Settings, load_config
from .fetcher import GitHubFetcher
from .checker import ReviewChecker
from .output import StatusCollector

__all__ = [
    'PullRequest',
    'Review',
    'GitHubAPIClient',
    'CacheKey',
    'CacheManager',
    'Settings',
    'load_config',
    'GitHubFetcher',
    'ReviewChecker',
    'StatusCollector',
]
