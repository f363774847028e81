"""Domain-layer error definitions."""

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


class AggregateIdMismatchError(DomainError):
    """Raised when a stream is projected or replayed for a different aggregate_id."""

    def __init__(self, aggregate_id: str, other_aggregate_id: str) -> None:
        super().__init__(
            f"Aggregate ID '{other_aggregate_id}' does not match "
            f"aggregate ID '{aggregate_id}'."
        )
        self.aggregate_id = aggregate_id
        self.other_aggregate_id = other_aggregate_id
