"""Data models for pull requests and their reviews."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class PullRequest:
    """A pull request as far as review checking is concerned."""
    id: int
    author: str

    @classmethod
    def from_api(cls, data: Dict) -> 'PullRequest':
        return cls(id=data['number'], author=data['user']['login'])


@dataclass(frozen=True)
class Review:
    state: str  # e.g. APPROVED, CHANGES_REQUESTED, COMMENTED

    @classmethod
    def from_api(cls, data: Dict) -> 'Review':
        return cls(state=data['state'])
