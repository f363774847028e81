"""Tests for repository-related error definitions."""

from strata.service_layer.repositories.errors import (
    AggregateNotFoundError,
    RepositoryError,
)

# pylint: disable=magic-value-comparison


class TestAggregateNotFoundError:
    """Tests for the AggregateNotFoundError exception."""

    @staticmethod
    def test_message_and_attributes():
        """The error names the aggregate type and id."""
        error = AggregateNotFoundError("Example", "ex-1")
        assert str(error) == "Example with ID ex-1 not found."
        assert error.aggregate_type_name == "Example"
        assert error.aggregate_id == "ex-1"

    @staticmethod
    def test_hierarchy():
        """It is both a repository error and a lookup error."""
        error = AggregateNotFoundError("Example", "ex-1")
        assert isinstance(error, RepositoryError)
        assert isinstance(error, LookupError)
