"""Domain models and services."""
