"""Infrastructure layer decorators."""

from .error_handler import PORT_ERRORS, handle_transport_errors

__all__ = [
    "PORT_ERRORS",
    "handle_transport_errors",
]
