"""GitHub API client for making single-page REST requests."""

import os
import logging
from typing import Any, Dict

import requests
from requests.adapters import HTTPAdapter

from .exceptions import RateLimited, FetchFailed

API_ROOT = 'https://api.github.com'


class GitHubAPIClient:
    """Handles authenticated GitHub API GET requests."""

    def __init__(self, token: str = None, timeout: float = 30):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
            timeout: Seconds to wait for the server before giving up
        """
        # Use provided token or fall back to environment variable
        self.token = token or os.environ.get('GITHUB_TOKEN')
        self.timeout = timeout
        self.session = requests.Session()

        # Every matching pull of every repo is fetched at once, so keep a large pool
        adapter = HTTPAdapter(pool_connections=50, pool_maxsize=50)
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)

        if self.token:
            self.session.headers.update({
                'Authorization': f'token {self.token}',
                'Accept': 'application/vnd.github.v3+json'
            })
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Rate limits will be much lower.")
            logging.warning("Set GITHUB_TOKEN environment variable or githubAuthToken in the config file.")

    def get_json(self, url: str, params: Dict = None) -> Any:
        """Fetch one page from a GitHub API endpoint.

        Args:
            url: The API endpoint URL
            params: Query parameters

        Returns:
            The decoded JSON body

        Raises:
            RateLimited: If GitHub answers 403
            FetchFailed: On any other transport or HTTP error
        """
        logging.debug(f"Fetching {url}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Failed fetching URL: {url}")
            raise FetchFailed(url, str(e)) from e

        if response.status_code == 403:
            logging.error(f"Failed fetching URL: {url} (rate limit exceeded)")
            raise RateLimited(url)

        try:
            response.raise_for_status()
            return response.json()
        except (requests.exceptions.HTTPError, ValueError) as e:
            logging.error(f"Failed fetching URL: {url}")
            raise FetchFailed(url, str(e)) from e

    @staticmethod
    def pulls_url(org: str, repo: str) -> str:
        return f"{API_ROOT}/repos/{org}/{repo}/pulls"

    @staticmethod
    def reviews_url(org: str, repo: str, pull_id: int) -> str:
        return f"{API_ROOT}/repos/{org}/{repo}/pulls/{pull_id}/reviews"

    def close(self):
        self.session.close()
