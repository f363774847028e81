"""Adapters: concrete implementations of the ports in `strata.interfaces`."""
