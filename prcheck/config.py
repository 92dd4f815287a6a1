"""
Configuration management for prcheck.

Settings are layered: built-in defaults, then the JSON config file, then
environment variables, and finally command line flags.
"""

import json
import logging
import os
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InvalidConfig
from .validators import DEFAULT_ORG_PREFIX

# Default config file path (relative to the working directory)
DEFAULT_CONFIG_FILE = "config.json"

# Cohorts start every six months counting from this date
COHORT_EPOCH = date(2013, 6, 1)
COHORT_LENGTH_MONTHS = 6


class Settings(BaseModel):
    """Resolved settings for one run.

    Config file keys are the camelCase aliases; CLI overrides use the field names.
    """
    org: Optional[str] = Field(None, alias='githubOrg')
    authors: List[str] = Field(default_factory=lambda: ['@'], alias='githubAuthors', min_length=1)
    cache_expiry: str = Field('60 minutes', alias='cacheExpiry')
    all_repos: List[str] = Field(default_factory=list, alias='allGithubRepos')
    auth_token: Optional[str] = Field(None, alias='githubAuthToken')
    org_prefix: str = Field(DEFAULT_ORG_PREFIX, alias='orgPrefix')
    cache_dir: str = Field('.prcheck_cache', alias='cacheDir')
    use_cache: bool = Field(True, alias='useCache')

    model_config = ConfigDict(extra='forbid', populate_by_name=True, strict=True)

    @field_validator('authors', mode='before')
    @classmethod
    def _single_author(cls, value):
        # "githubAuthors": "@" is shorthand for ["@"]
        return [value] if isinstance(value, str) else value


class EnvSettings(BaseSettings):
    """Settings taken from the environment (GITHUB_TOKEN, USE_CACHE)."""
    github_token: Optional[str] = None
    use_cache: Optional[bool] = None

    model_config = SettingsConfigDict(extra='ignore')


def _describe(error: ValidationError) -> str:
    return '; '.join(
        f"{'.'.join(str(part) for part in e['loc']) or 'config'}: {e['msg']}" for e in error.errors()
    )


def load_config(config_path: str = DEFAULT_CONFIG_FILE, cli_overrides: Optional[dict] = None) -> Settings:
    """
    Load settings by merging (in order of precedence):
      1. Built-in defaults
      2. The JSON config file, if it exists (null values are ignored)
      3. Environment variables (GITHUB_TOKEN, USE_CACHE)
      4. CLI argument overrides (Settings field names; None values are ignored)

    Raises:
        InvalidConfig: If the file is not valid JSON, or any layer does not match the schema
    """
    file_data = {}
    if os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            raise InvalidConfig(f"Could not load config from {config_path}: {e}") from e

        if not isinstance(file_data, dict):
            raise InvalidConfig(f"Config file {config_path} must contain a JSON object")
        logging.info(f"Loaded config from {config_path}")
    else:
        logging.debug(f"No config file found at {config_path}, using defaults")

    try:
        settings = Settings.model_validate({k: v for k, v in file_data.items() if v is not None})
    except ValidationError as e:
        raise InvalidConfig(f"Invalid config in {config_path}: {_describe(e)}") from e

    try:
        env = EnvSettings()
    except ValidationError as e:
        raise InvalidConfig(f"Invalid environment setting: {_describe(e)}") from e

    overrides = {}
    if env.github_token:
        overrides['auth_token'] = env.github_token.strip()
    if env.use_cache is not None:
        overrides['use_cache'] = env.use_cache
    overrides.update({k: v for k, v in (cli_overrides or {}).items() if v is not None})

    if overrides:
        try:
            settings = Settings.model_validate({**settings.model_dump(), **overrides})
        except ValidationError as e:
            raise InvalidConfig(f"Invalid setting: {_describe(e)}") from e

    return settings


def months_between(start: date, end: date) -> int:
    """Number of whole months from start to end."""
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months


def auto_org_name(prefix: str = DEFAULT_ORG_PREFIX, now: Optional[datetime] = None) -> str:
    """Derive the current cohort's org name, e.g. "Ada-C26"."""
    today = (now or datetime.now()).date()
    cohort = months_between(COHORT_EPOCH, today) // COHORT_LENGTH_MONTHS
    return f"{prefix}-C{cohort}"


def resolve_org(settings: Settings, now: Optional[datetime] = None) -> str:
    """Return the configured org, or the auto-derived one when none is configured.

    Logs a warning when the configured org differs from the auto-derived one.
    """
    auto_org = auto_org_name(settings.org_prefix, now)

    if settings.org and settings.org != auto_org:
        logging.warning("GitHub org name may be outdated!")
        logging.warning(f"\t{settings.org} --> {auto_org}")

    return settings.org or auto_org
