# -*- coding: utf-8 -*-
"""
Registration Change Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "RegistrationChangeApiClient",
    "get_api_client",
    "reset_api_client",
    "extract_error_message",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name in ("RegistrationChangeApiClient", "get_api_client", "reset_api_client"):
        from . import api_client
        return getattr(api_client, name)
    elif name == "extract_error_message":
        from .error_mapper import extract_error_message
        return extract_error_message
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
