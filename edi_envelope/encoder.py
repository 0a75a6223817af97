"""Public encode and render entry points.

WHY: Most callers want one call: tree (plus optional separator
override) in, encoded segments out. This module wires the separator
context, the dialect registry and the envelope driver together so the
CLI, the HTTP API and library users share one code path.

HOW: encode_interchange() builds the SeparatorContext (failing before
any output on a bad configuration), picks the dialect's EnvelopeSteps
from PIPELINES and runs the driver. render_interchange() joins the
result into one EDI string.

RULES:
- Each call builds its own context and result list; nothing is cached
- Rendering writes the advice string verbatim and terminates every other
  entry with the segment terminator
"""

from __future__ import annotations

from typing import List, Optional
from xml.etree.ElementTree import Element

from edi_envelope.core.envelope import run_envelope
from edi_envelope.core.separators import SeparatorContext, SeparatorOverride, build_separator_context
from edi_envelope.dialects import PIPELINES


def encode_with_context(tree: Element, context: SeparatorContext) -> List[str]:
    """Run the envelope pipeline of *context*'s dialect over *tree*."""
    return run_envelope(PIPELINES[context.dialect], tree, context)


def encode_interchange(
    tree: Element,
    override: Optional[SeparatorOverride] = None,
    dialect: Optional[str] = None,
) -> List[str]:
    """Encode an interchange tree into its ordered list of segments.

    Args:
        tree: The interchange root node.
        override: Optional separator replacements.
        dialect: Dialect identifier; defaults to config.DEFAULT_DIALECT.

    Returns:
        Encoded entries in stream order, without segment terminators.

    Raises:
        ConfigurationError: If the separators are invalid (no output).
        SegmentNotFoundError: If a mandatory envelope segment is missing.
        SegmentFormatError: If any segment node is malformed.
    """
    context = build_separator_context(dialect=dialect, override=override)
    return encode_with_context(tree, context)


def has_separator_advice(context: SeparatorContext) -> bool:
    """True when an encode with *context* starts with the advice string."""
    return not context.is_default and context.spec.advice_tag is not None


def render_interchange(
    segments: List[str],
    context: SeparatorContext,
    newline: bool = False,
) -> str:
    """Join encoded entries into one EDI string.

    RULES:
    - The first entry is written as-is when it is the separator advice
      (it already ends with the terminator character)
    - Every other entry is followed by context.terminator
    - newline=True adds "\\n" after each entry, for readability
    """
    line_end = "\n" if newline else ""
    advice = has_separator_advice(context)

    parts: List[str] = []
    for index, segment in enumerate(segments):
        if index == 0 and advice:
            parts.append(segment + line_end)
        else:
            parts.append(segment + context.terminator + line_end)
    return "".join(parts)
