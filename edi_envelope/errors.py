"""Exception types raised while building and encoding an interchange.

WHY: Callers need to tell a bad separator configuration apart from a
missing envelope segment and from a malformed segment node. The driver
itself needs the same distinction: a missing group boundary is fine in
EDIFACT, a malformed one never is.

HOW: A small hierarchy under EnvelopeError. Each concrete type also
subclasses the closest builtin category (ValueError, LookupError) so code
that already catches those keeps working.

RULES:
- ConfigurationError is raised before any segment is produced
- SegmentNotFoundError and SegmentFormatError always carry the tag
- Nothing here is retried; encoding is a pure transformation
"""

from __future__ import annotations


class EnvelopeError(Exception):
    """Base class for every error raised by edi_envelope."""


class ConfigurationError(EnvelopeError, ValueError):
    """Raised when the separator configuration is invalid.

    WHY: Two equal separators make the output ambiguous for any reader,
    so the encode must stop before it writes anything.

    RULES:
    - Raised for non-distinct separators, values that are not a single
      character, unknown dialects, and override documents that fail
      schema validation
    """


class SegmentNotFoundError(EnvelopeError, LookupError):
    """Raised when an expected segment node is absent from the tree."""

    def __init__(self, tag: str, message: str | None = None) -> None:
        self.tag = tag
        super().__init__(message or "Segment {} not found".format(tag))


class SegmentFormatError(EnvelopeError, ValueError):
    """Raised when a segment node cannot be encoded.

    HOW: Wraps the segment tag and a human-readable reason, e.g. too many
    data elements or a data value containing an unescapable delimiter.
    """

    def __init__(self, tag: str, reason: str) -> None:
        self.tag = tag
        self.reason = reason
        super().__init__("Malformed segment {}: {}".format(tag, reason))
