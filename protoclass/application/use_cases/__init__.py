"""Use cases orchestrating parsing and scanning."""
