"""Parsing of human-readable durations such as "60 minutes" into cache cutoffs."""

import re
from datetime import datetime, timedelta
from typing import Optional

from .exceptions import InvalidMaxCacheAge

_SECOND = timedelta(seconds=1)
_MINUTE = timedelta(minutes=1)
_HOUR = timedelta(hours=1)
_DAY = timedelta(days=1)
_WEEK = timedelta(weeks=1)
# Calendar units use fixed lengths
_MONTH = timedelta(days=30)
_YEAR = timedelta(days=365)

_UNITS = {
    's': _SECOND, 'sec': _SECOND, 'secs': _SECOND, 'second': _SECOND, 'seconds': _SECOND,
    'm': _MINUTE, 'min': _MINUTE, 'mins': _MINUTE, 'minute': _MINUTE, 'minutes': _MINUTE,
    'h': _HOUR, 'hr': _HOUR, 'hrs': _HOUR, 'hour': _HOUR, 'hours': _HOUR,
    'd': _DAY, 'day': _DAY, 'days': _DAY,
    'w': _WEEK, 'wk': _WEEK, 'wks': _WEEK, 'week': _WEEK, 'weeks': _WEEK,
    'mo': _MONTH, 'mos': _MONTH, 'month': _MONTH, 'months': _MONTH,
    'y': _YEAR, 'yr': _YEAR, 'yrs': _YEAR, 'year': _YEAR, 'years': _YEAR,
}

_TERM_RE = re.compile(r'(\d+(?:\.\d+)?|an?)\s*([a-z]+)')
_SEPARATOR_RE = re.compile(r'[\s,]*(?:and)?[\s,]*')


def parse_duration(text: str) -> timedelta:
    """Parse a duration like "60 minutes", "1 hour 30 min", "2d", "1 month" or "an hour".

    A leading "in" and a trailing "ago" are accepted and ignored.

    Raises:
        InvalidMaxCacheAge: If the text is not a positive duration
    """
    if not isinstance(text, str):
        raise InvalidMaxCacheAge(f'Invalid maxCacheAge: {text!r}.')

    normalized = text.strip().lower()
    normalized = re.sub(r'^in\s+', '', normalized)
    normalized = re.sub(r'\s+ago$', '', normalized)

    total = timedelta()
    pos = 0
    matched = False
    while pos < len(normalized):
        sep = _SEPARATOR_RE.match(normalized, pos)
        pos = sep.end()
        if pos >= len(normalized):
            break

        term = _TERM_RE.match(normalized, pos)
        if not term or term.group(2) not in _UNITS:
            raise InvalidMaxCacheAge(f'Invalid maxCacheAge: {text!r}.')

        amount = term.group(1)
        value = 1.0 if amount in ('a', 'an') else float(amount)
        try:
            total += _UNITS[term.group(2)] * value
        except OverflowError:
            raise InvalidMaxCacheAge(f'Invalid maxCacheAge: {text!r} is too long.') from None
        pos = term.end()
        matched = True

    if not matched or total <= timedelta():
        raise InvalidMaxCacheAge(f'Invalid maxCacheAge: {text!r}.')
    return total


def cutoff_from_duration(text: str, now: Optional[datetime] = None) -> datetime:
    """Turn a duration into the instant that long before now."""
    now = now or datetime.now()
    duration = parse_duration(text)
    try:
        return now - duration
    except OverflowError:
        raise InvalidMaxCacheAge(f'Invalid maxCacheAge: {text!r} is too long.') from None
