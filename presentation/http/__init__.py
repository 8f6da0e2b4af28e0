"""HTTP presentation layer."""
from .status_api import StatusServer, create_status_app

__all__ = ["StatusServer", "create_status_app"]
