"""Output formatting and collection of review status lines."""

import sys
from typing import List, TextIO


# ANSI color codes
GREEN = '\033[92m'
RED = '\033[91m'
CYAN = '\033[96m'
MAGENTA = '\033[95m'
WHITE = '\033[97m'
BG_RED = '\033[41m'
BOLD = '\033[1m'
RESET = '\033[0m'


def format_prefix(user: str, repo: str) -> str:
    return f"{MAGENTA}{user}{RESET} -> {CYAN}{repo}{RESET}"


def pull_url(org: str, repo: str, pull_id: int) -> str:
    return f"https://github.com/{org}/{repo}/pull/{pull_id}/changes"


def clone_command(user: str, repo: str) -> str:
    return f"git clone https://github.com/{user}/{repo} {user}/{repo}"


def format_no_pulls(user: str, repo: str) -> str:
    return f"{format_prefix(user, repo)}: {WHITE}no pulls found{RESET}"


def format_needs_review(org: str, repo: str, user: str, pull_id: int) -> str:
    """Status line for a pull without any review, with its URL and a clone command."""
    return (
        f"{format_prefix(user, repo)}: {BOLD}{BG_RED}{WHITE}needs review!{RESET}\n"
        f"\t{WHITE}{BOLD}{BG_RED}{pull_url(org, repo, pull_id)}{RESET}\n"
        f"\t{CYAN}{clone_command(user, repo)}{RESET}\n"
    )


def format_reviewed(user: str, repo: str, state: str) -> str:
    return f"{format_prefix(user, repo)}: {GREEN}reviewed{RESET}, status: {state}"


class StatusCollector:
    """Buffers status lines so they can be printed sorted, whatever order repos finish in."""

    def __init__(self):
        self._lines: List[str] = []

    def add(self, line: str):
        self._lines.append(line)

    def lines(self) -> List[str]:
        """Return the collected lines sorted case-insensitively."""
        return sorted(self._lines, key=str.lower)

    def flush(self, stream: TextIO = None):
        """Print all collected lines in sorted order and empty the buffer.

        Args:
            stream: Where to print, stdout by default
        """
        stream = stream or sys.stdout
        for line in self.lines():
            print(line, file=stream)
        self._lines.clear()

    def __len__(self) -> int:
        return len(self._lines)
