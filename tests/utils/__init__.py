"""Shared fakes for unit tests.

- clock.py: virtual clock (`FakeClock`) and `settle()`
- connections.py: scripted realtime connections
- settings.py: small settings builders
"""

from __future__ import annotations

from .clock import FakeClock, settle
from .connections import HANG, FakeConnection, FakeConnectionFactory

__all__ = ["HANG", "FakeClock", "FakeConnection", "FakeConnectionFactory", "settle"]
