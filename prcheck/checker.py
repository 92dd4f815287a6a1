"""Review status checking for the pull requests of a set of repositories."""

import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Sequence, Union

from .fetcher import GitHubFetcher
from .output import StatusCollector, format_no_pulls, format_needs_review, format_reviewed

# Single-element marker meaning "all known values"
WILDCARD = '@'


def is_wildcard(values: Sequence[str]) -> bool:
    return len(values) == 1 and values[0] == WILDCARD


def dedupe(values: Sequence[str]) -> List[str]:
    """Remove duplicates, keeping the order of first appearance."""
    return list(dict.fromkeys(values))


class ReviewChecker:
    """Reports, per author and repository, whether pull requests have been reviewed."""

    def __init__(self, fetcher: GitHubFetcher, collector: StatusCollector):
        """Initialize the checker.

        Args:
            fetcher: Source of pulls and reviews
            collector: Receives one status line per author without pulls and per pull
        """
        self.fetcher = fetcher
        self.collector = collector

    async def check_repo(self, org: str, repo: str, authors: Sequence[str],
                         min_fresh_time: Union[datetime, float]):
        """Check the pull requests of one repository.

        Args:
            org: GitHub org (or user) the pulls were made to, not a wildcard
            repo: Repository name, not a wildcard
            authors: Usernames to check, or the wildcard for every author found
            min_fresh_time: Cached API data older than this is refetched
        """
        pulls = await self.fetcher.get_pulls(org, repo, min_fresh_time)

        if is_wildcard(authors):
            users = dedupe([pr.author for pr in pulls])
        else:
            users = dedupe(authors)
            pulls = [pr for pr in pulls if pr.author in users]

        for user in users:
            if not any(pr.author == user for pr in pulls):
                self.collector.add(format_no_pulls(user, repo))

        # Any failing fetch aborts the rest of this repo
        reviews_for_pulls = await asyncio.gather(*(
            self.fetcher.get_reviews(org, repo, pr.id, min_fresh_time) for pr in pulls
        ))

        for pr, reviews in zip(pulls, reviews_for_pulls):
            if not reviews:
                self.collector.add(format_needs_review(org, repo, pr.author, pr.id))
            else:
                # Only the first review counts
                self.collector.add(format_reviewed(pr.author, repo, reviews[0].state))

        logging.debug(f"Checked {len(pulls)} pull(s) in {org}/{repo}")

    async def check_repos(self, org: str, repos: Sequence[str], authors: Sequence[str],
                          min_fresh_time: Union[datetime, float]) -> Dict[str, BaseException]:
        """Check several repositories concurrently.

        A failure in one repository does not stop the others.

        Returns:
            Mapping of repository name to the exception that aborted it
        """
        logging.info(f"Checking {len(repos)} repository/repositories in {org}")
        results = await asyncio.gather(
            *(self.check_repo(org, repo, authors, min_fresh_time) for repo in repos),
            return_exceptions=True
        )

        failures = {}
        for repo, result in zip(repos, results):
            if isinstance(result, Exception):
                logging.error(f"Error checking {org}/{repo}: {result}")
                failures[repo] = result
            elif isinstance(result, BaseException):
                raise result
        return failures
