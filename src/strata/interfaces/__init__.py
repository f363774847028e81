"""Ports of STRATA.

Framework-free contracts that the service layer depends on and the adapters
implement. Do NOT import from adapters, bootstrap, or entrypoints here.
"""
