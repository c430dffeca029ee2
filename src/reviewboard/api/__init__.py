"""Reviewboard API package."""

from reviewboard.api.errors import register_registry_exception_handlers
from reviewboard.api.routes import registry_router

__all__ = ["registry_router", "register_registry_exception_handlers"]
