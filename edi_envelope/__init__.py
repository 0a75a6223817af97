"""EDI Envelope Encoder — interchange envelopes from XML trees.

WHY: EDI trading partners exchange interchanges wrapped in control
segments (UNA/UNB/UNG/UNE/UNZ for EDIFACT, ISA/GS/GE/IEA for X12).
Applications build the business content as an XML tree; this package
turns that tree into the ordered list of encoded segments, with the
right envelope around it and the right separators inside it.

HOW: Three-stage pipeline: resolve separators (dialect defaults merged
with caller overrides), run the dialect's envelope steps over the tree
(core driver + pluggable dialect steps), render the segment list into a
single EDI string. Each stage is independently testable.

RULES:
- Every dialect runs through the same generic driver
- Adding a dialect = one new module under dialects/, no core changes
- The SeparatorContext is the stable contract between configuration and
  encoding; it is immutable once built
"""

from edi_envelope.encoder import encode_interchange, encode_with_context, render_interchange
from edi_envelope.core.separators import SeparatorContext, SeparatorOverride, build_separator_context
from edi_envelope.errors import (
    ConfigurationError,
    EnvelopeError,
    SegmentFormatError,
    SegmentNotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "EnvelopeError",
    "SegmentFormatError",
    "SegmentNotFoundError",
    "SeparatorContext",
    "SeparatorOverride",
    "build_separator_context",
    "encode_interchange",
    "encode_with_context",
    "render_interchange",
]
