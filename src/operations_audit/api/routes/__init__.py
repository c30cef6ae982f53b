"""Pre-audit API routes."""

from . import submit

__all__ = ["submit"]
