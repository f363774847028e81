"""Event store adapters and the shared ``event_store`` table definition."""
