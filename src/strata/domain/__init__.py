"""Domain layer: events, aggregates, event streams and projections.

Nothing in this package performs I/O or imports from the adapters, service
layer or bootstrap packages.
"""
