"""Exceptions raised while checking pull request review status."""


class PRCheckError(Exception):
    """Base class for all errors raised by prcheck."""


class ValidationError(PRCheckError):
    """Input rejected before any network or disk access."""


class InvalidOrgName(ValidationError):
    pass


class InvalidRepoName(ValidationError):
    pass


class InvalidPullId(ValidationError):
    pass


class InvalidAuthToken(ValidationError):
    pass


class InvalidMaxCacheAge(PRCheckError):
    """The maximum cache age could not be parsed as a duration."""


class InvalidConfig(PRCheckError):
    """The configuration file does not match the expected schema."""


class GitHubAPIError(PRCheckError):
    """A request to the GitHub API failed.

    Attributes:
        url: The URL that was being fetched
    """

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class RateLimited(GitHubAPIError):
    """GitHub answered 403, which almost always means the rate limit is exhausted."""

    def __init__(self, url: str):
        super().__init__(
            "You're rate-limited. Specify an auth token (githubAuthToken in the config "
            "file or the GITHUB_TOKEN environment variable), or rotate the current one.",
            url
        )


class FetchFailed(GitHubAPIError):
    """Any other transport or HTTP failure."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed fetching {url}: {reason}", url)
        self.reason = reason
