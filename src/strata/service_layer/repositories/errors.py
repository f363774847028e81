"""Repository-related error definitions."""


class RepositoryError(Exception):
    """Base class for repository-related errors."""


class AggregateNotFoundError(RepositoryError, LookupError):
    """Raised when an aggregate has no events in the store."""

    aggregate_id: str
    aggregate_type_name: str

    def __init__(self, aggregate_type_name: str, aggregate_id: str):
        super().__init__(f"{aggregate_type_name} with ID {aggregate_id} not found.")
        self.aggregate_type_name = aggregate_type_name
        self.aggregate_id = aggregate_id
