"""API routers."""

from tempo.api import goals

__all__ = [
    "goals",
]
