"""Test doubles for unit testing.

Test doubles are fake implementations of interfaces used for testing.
They implement the actual interface contracts, so the same fake can be
reused by every layer's tests.

Example:
    >>> from tests.doubles import FakeTransport
    >>> transport = FakeTransport()
    >>> transport.add_response(request_prefix, expected_response)
    >>> await transport.write(request)
    >>> assert await transport.read(256, 1.0) == expected_response
"""

from .fake_clock import FakeClock
from .fake_transport import FakeTransport
from .frames import build_response, request_prefix
from .recording_sink import RecordingSink

__all__ = [
    "FakeClock",
    "FakeTransport",
    "RecordingSink",
    "build_response",
    "request_prefix",
]
