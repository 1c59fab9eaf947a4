"""Shared exception hierarchy used across layers."""


class ProtoclassError(Exception):
    """Base class for errors raised by protoclass."""

    def __init__(self, message: str, *, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class ParsingError(ProtoclassError):
    """Raised when JavaScript source parsing fails."""


class InheritanceConflictError(ProtoclassError):
    """Raised when a class is given a different superclass under the ``error`` policy."""
