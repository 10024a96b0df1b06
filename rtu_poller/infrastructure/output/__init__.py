"""Reading output sinks."""

from .console_sink import ConsoleSink

__all__ = ["ConsoleSink"]
