"""API router factory functions."""
from .exports import create_exports_router
from .systems import create_systems_router

__all__ = [
    "create_exports_router",
    "create_systems_router",
]
