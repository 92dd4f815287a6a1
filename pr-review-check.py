#!/usr/bin/env python3
"""
PR Review Checker
Reports the review status of student pull requests, caching GitHub API responses on disk.
"""

from prcheck.cli import main


if __name__ == "__main__":
    main()
