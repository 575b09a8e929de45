"""Engine error classes.

The analytics core never raises for bad input text; these exceptions are
for host-facing helpers that need to refuse work explicitly.
"""

from __future__ import annotations


class SocialAnalyticsError(Exception):
    """Base exception for the social analytics engine."""

    pass


class EmptyGraphError(SocialAnalyticsError):
    """Raised when a host asks for analysis of input that produced no nodes."""

    pass


class InputReadError(SocialAnalyticsError):
    """Raised when relationship text cannot be read from its source."""

    pass
