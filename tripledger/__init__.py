"""Mini README: Core package initializer for the trip ledger.

The package prices freight trips, reconciles what drivers and helpers have
earned against what they were paid, and produces ad hoc quotes. Subpackages
are leaf-first: ``rates`` and ``staff`` feed ``trips``, which feeds
``finance``; ``budget`` stands alone. Storage, the operations desk, the
insight generator and the HTTP interface sit around that core.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
