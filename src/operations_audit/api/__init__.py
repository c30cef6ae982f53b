"""HTTP API for pre-audit submissions."""

from .server import create_app

__all__ = ["create_app"]
