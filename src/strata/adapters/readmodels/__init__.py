"""Readmodel repository adapters and the shared ``readmodels`` table definition."""
