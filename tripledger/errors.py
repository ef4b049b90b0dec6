"""Mini README: Exceptions raised by the ledger's calling layer.

Structure:
    * ValidationError - an operation was rejected before persistence.
    * RecordNotFoundError - an edit or delete named an unknown identifier.
    * StorageError - a persisted collection could not be read.

The computation modules never raise these; they are reserved for the
operations desk, the store and the HTTP interface that maps them onto
status codes.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when submitted data fails the ledger's business validation."""


class RecordNotFoundError(KeyError):
    """Raised when a record identifier does not exist in its collection."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Record not found"


class StorageError(RuntimeError):
    """Raised when a persisted collection is unreadable."""
