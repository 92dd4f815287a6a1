"""
Unit tests for PullRequest and Review models
"""

import pytest
from prcheck.models import PullRequest, Review


class TestPullRequest:
    """Test cases for building pull requests from API data."""

    def test_from_api(self):
        """Test that number and author login are picked up."""
        pr = PullRequest.from_api({
            'number': 12,
            'user': {'login': 'target_user'},
            'title': 'Ignored',
        })
        assert pr == PullRequest(id=12, author='target_user')

    def test_missing_fields_raise(self):
        with pytest.raises(KeyError):
            PullRequest.from_api({'number': 1})


class TestReview:
    """Test cases for building reviews from API data."""

    def test_from_api(self):
        review = Review.from_api({'state': 'CHANGES_REQUESTED', 'user': {'login': 'reviewer'}})
        assert review.state == 'CHANGES_REQUESTED'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
