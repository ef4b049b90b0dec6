"""Mini README: HTTP interface for the trip ledger.

Exports the FastAPI application factory serving the JSON API used by the
dashboard front end. Rendering lives entirely in that front end.
"""

from .web_app import create_application

__all__ = ["create_application"]
