"""Input validation for everything that ends up in a URL or a cache file name."""

import re
from typing import Optional, Union

from .exceptions import InvalidOrgName, InvalidRepoName, InvalidPullId, InvalidAuthToken

DEFAULT_ORG_PREFIX = 'Ada'

_REPO_NAME_RE = re.compile(r'[\w-]+', re.ASCII)
_AUTH_TOKEN_RE = re.compile(r'[0-9a-f]+')


def validate_org_name(org_name: str, prefix: str = DEFAULT_ORG_PREFIX) -> str:
    """Check that an org name follows the "<prefix>-C<cohort>" convention.

    Args:
        org_name: GitHub organization name, e.g. "Ada-C11"
        prefix: Institutional prefix the org name must start with

    Returns:
        The validated org name

    Raises:
        InvalidOrgName: If the name does not match the convention
    """
    pattern = rf'{re.escape(prefix)}-C\d+'
    if not isinstance(org_name, str) or not re.fullmatch(pattern, org_name, re.ASCII):
        raise InvalidOrgName(
            f'Invalid GitHub org name: {org_name!r}. '
            f'GitHub org names must be of format "{prefix}-C#"'
        )
    return org_name


def validate_repo_name(repo_name: str) -> str:
    if not isinstance(repo_name, str) or not _REPO_NAME_RE.fullmatch(repo_name):
        raise InvalidRepoName(f'Invalid GitHub repo name: {repo_name!r}.')
    return repo_name


def validate_pull_id(pull_id: Union[int, str]) -> int:
    """Parse a pull ID, which must be a positive integer.

    Returns:
        The pull ID as an int
    """
    # bool is an int subclass, True would otherwise pass as pull #1
    if isinstance(pull_id, bool):
        raise InvalidPullId(f'Invalid GitHub pull ID: {pull_id!r}. Pull IDs must be positive integers.')

    try:
        value = int(str(pull_id).strip())
    except ValueError:
        raise InvalidPullId(
            f'Invalid GitHub pull ID: {pull_id!r}. Pull IDs must be positive integers.'
        ) from None

    if value < 1:
        raise InvalidPullId(f'Invalid GitHub pull ID: {pull_id!r}. Pull IDs must be positive integers.')
    return value


def validate_auth_token(token: Optional[str]) -> Optional[str]:
    """Check an optional auth token; when present it must be lowercase hex."""
    if not token:
        return token
    if not isinstance(token, str) or not _AUTH_TOKEN_RE.fullmatch(token):
        raise InvalidAuthToken(
            'Invalid GitHub auth token. Auth tokens, when provided, must be in hexadecimal format.'
        )
    return token
