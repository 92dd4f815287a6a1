"""Command line interface for prcheck.

Commands:
  check   report the review status of pull requests in one or more repos
"""

import asyncio
import logging
import os
from typing import List, Sequence

import click
from dotenv import load_dotenv

from .api_client import GitHubAPIClient
from .cache import CacheManager
from .checker import ReviewChecker, WILDCARD, is_wildcard
from .config import DEFAULT_CONFIG_FILE, load_config, resolve_org
from .durations import cutoff_from_duration
from .exceptions import InvalidConfig, InvalidMaxCacheAge
from .fetcher import GitHubFetcher
from .output import StatusCollector

EXAMPLES = """
\b
Examples:
  prcheck check repo_1 repo_2
      Search for PRs from repo_1 and repo_2, filtering authors from the config file
  prcheck check repo_1 repo_2 --authors user_1,user_2
      Search for PRs from repo_1 and repo_2 with authors user_1 and user_2
  prcheck check @ -a user_1 -a user_2
      Search for PRs from every configured repo with authors user_1 and user_2
  prcheck check @ --authors @
      Search for PRs from every configured repo authored by anyone
"""


def configure_logging():
    """Configure logging (can be overridden by LOG_LEVEL environment variable)."""
    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )


def split_values(values: Sequence[str]) -> List[str]:
    """Flatten repeated and comma separated option values."""
    return [v.strip() for value in values for v in value.split(',') if v.strip()]


@click.group(epilog=EXAMPLES)
@click.option(
    "--config",
    "config_path",
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    help="Path to the JSON configuration file.",
    envvar="PRCHECK_CONFIG",
)
@click.pass_context
def main(ctx: click.Context, config_path: str):
    """Check GitHub pull request review status for student repositories."""
    configure_logging()

    # Load environment variables from .env file if it exists
    load_dotenv()

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@main.command("check", epilog=EXAMPLES)
@click.argument("repos", nargs=-1, required=True)
@click.option(
    "--authors", "-a",
    multiple=True,
    help=f"Usernames to check (repeatable or comma separated), or '{WILDCARD}' for everyone. "
         "Defaults to the config file.",
)
@click.option("--org", "-o", default=None, help="GitHub org. Defaults to the config file or the current cohort.")
@click.option(
    "--maxCacheAge", "-c", "max_cache_age",
    default=None,
    help="Maximum age of cached API data, e.g. '60 minutes'. Defaults to the config file.",
)
@click.pass_context
def check_cmd(ctx: click.Context, repos, authors, org, max_cache_age):
    """Checks for PR status."""
    overrides = {
        "org": org,
        "authors": split_values(authors) or None,
        "cache_expiry": max_cache_age,
    }
    try:
        settings = load_config(ctx.obj["config_path"], cli_overrides=overrides)
    except InvalidConfig as e:
        raise click.ClickException(str(e)) from e

    try:
        min_fresh_time = cutoff_from_duration(settings.cache_expiry)
    except InvalidMaxCacheAge as e:
        raise click.BadParameter(str(e), param_hint="'--maxCacheAge'") from e

    repos = list(repos)
    if is_wildcard(repos):
        repos = list(settings.all_repos)
        if not repos:
            raise click.UsageError(f"'{WILDCARD}' needs allGithubRepos in the config file.")

    # The outdated-org warning only applies to an org that was not given on the command line
    org = settings.org if org else resolve_org(settings)

    api_client = GitHubAPIClient(settings.auth_token)
    cache_manager = CacheManager(settings.cache_dir, settings.use_cache)
    fetcher = GitHubFetcher(api_client, cache_manager, settings.org_prefix)
    collector = StatusCollector()
    checker = ReviewChecker(fetcher, collector)

    try:
        failures = asyncio.run(checker.check_repos(org, repos, settings.authors, min_fresh_time))
    finally:
        api_client.close()

    collector.flush()

    if failures:
        for repo, error in failures.items():
            click.echo(click.style(f"{repo}: {error}", fg="red", bold=True), err=True)
        ctx.exit(1)
