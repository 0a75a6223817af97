"""Envelope driver: ordered control-segment assembly over an interchange tree.

WHY: Every dialect wraps its messages the same way: optional separator
advice, interchange header, functional groups (header, messages,
trailer), interchange trailer. Only the tags and the optionality of each
step differ. Keeping the order in one generic driver and the per-dialect
behavior in a plain value (EnvelopeSteps) lets a dialect be added without
touching the driver.

HOW: run_envelope() walks the tree in the fixed order and calls the
steps supplied in an EnvelopeSteps value, appending whatever text each
step returns to a private result list. Step factories build the common
step kinds:
  mandatory_segment  — lookup + encode; absence aborts the encode
  optional_segment   — lookup + encode; absence contributes nothing
  separator_advice   — fixed 9-char advice string when separators differ
  message_body       — encodes every segment of every message in a group
Lookups return an explicit outcome (Found / Absent) so absence is a value
the step branches on, and only malformed input raises.

RULES:
- Order: advice, header, {group header, group body, group trailer}*, trailer
- A root child that is neither a group nor an interchange_tags segment
  aborts the run before any step (SegmentFormatError)
- A step returning None contributes nothing to the result
- Any EnvelopeError aborts the run; the partial result is never returned
- The tree and the context are only read, never modified
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Collection, List, Optional, Union
from xml.etree.ElementTree import Element

from edi_envelope.core.segments import SegmentType, encode_segment
from edi_envelope.core.separators import SeparatorContext
from edi_envelope.core.tree import find_segment, iter_children, local_name
from edi_envelope.errors import EnvelopeError, SegmentFormatError, SegmentNotFoundError

logger = logging.getLogger(__name__)

# Fixed decimal mark and reserved character of the separator advice string.
ADVICE_DECIMAL_MARK = "."
ADVICE_RESERVED = " "


# ---------------------------------------------------------------------------
# Lookup outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Found:
    """The segment was present and encoded to *text*."""

    text: str


@dataclass(frozen=True)
class Absent:
    """The segment tag was not present under the searched node."""

    tag: str


SegmentOutcome = Union[Found, Absent]

Step = Callable[[Element, SeparatorContext], Optional[str]]
BodyStep = Callable[[Element, SeparatorContext], List[str]]


def lookup_segment(
    subtree: Element,
    segment_type: SegmentType,
    context: SeparatorContext,
) -> SegmentOutcome:
    """Find and encode one segment, reporting absence as a value.

    Raises:
        SegmentFormatError: If the segment is present but malformed.
    """
    node = find_segment(subtree, segment_type.tag)
    if node is None:
        return Absent(segment_type.tag)
    return Found(encode_segment(segment_type, node, context))


# ---------------------------------------------------------------------------
# Step factories
# ---------------------------------------------------------------------------


def separator_advice(subtree: Element, context: SeparatorContext) -> Optional[str]:
    """Build the separator advice string, or None when it is not needed.

    WHY: A receiver assumes the dialect defaults unless told otherwise.
    When any separator deviates, the interchange must open with a fixed
    positional advice string (UNA for EDIFACT) declaring them.

    HOW: Built directly from the four characters, not via the segment
    encoder: it is a fixed 9-character format, not a delimited segment.

    RULES:
    - Returns None when context.is_default
    - Returns None when the dialect has no advice tag (X12)
    - Layout: tag, component, data, ".", release, " ", terminator
    """
    advice_tag = context.spec.advice_tag
    if context.is_default or advice_tag is None:
        return None

    return "".join((
        advice_tag,
        context.component,
        context.data,
        ADVICE_DECIMAL_MARK,
        context.release,
        ADVICE_RESERVED,
        context.terminator,
    ))


def mandatory_segment(segment_type: SegmentType) -> Step:
    """Step that encodes *segment_type* and fails when it is absent.

    RULES:
    - Absent → SegmentNotFoundError (the encode aborts)
    - Malformed → SegmentFormatError (the encode aborts)
    """

    def step(subtree: Element, context: SeparatorContext) -> Optional[str]:
        outcome = lookup_segment(subtree, segment_type, context)
        if isinstance(outcome, Absent):
            raise SegmentNotFoundError(
                outcome.tag,
                "Mandatory {} ({}) not found under <{}>".format(
                    segment_type.name, outcome.tag, local_name(subtree)
                ),
            )
        return outcome.text

    return step


def optional_segment(segment_type: SegmentType) -> Step:
    """Step that encodes *segment_type* and skips it when it is absent.

    RULES:
    - Absent → None, logged at debug level, no error
    - Malformed → SegmentFormatError (the encode aborts)
    """

    def step(subtree: Element, context: SeparatorContext) -> Optional[str]:
        outcome = lookup_segment(subtree, segment_type, context)
        if isinstance(outcome, Absent):
            logger.debug(
                "Optional %s (%s) absent under <%s>, skipped",
                segment_type.name, outcome.tag, local_name(subtree),
            )
            return None
        return outcome.text

    return step


def message_body(message_tag: str, boundary_tags: Collection[str]) -> BodyStep:
    """Step that encodes every segment of every message in a group.

    HOW: Children of the group named *message_tag* are messages; each of
    their element children is a segment, encoded with an unbounded
    SegmentType keyed on its own tag. Children named in *boundary_tags*
    (the group header and trailer) are left to their own steps.

    RULES:
    - Any other child of the group is a SegmentFormatError
    - Segment order follows document order
    """

    def step(group: Element, context: SeparatorContext) -> List[str]:
        segments: List[str] = []
        for child in group:
            if not isinstance(child.tag, str):
                continue
            name = local_name(child)
            if name in boundary_tags:
                continue
            if name != message_tag:
                raise SegmentFormatError(
                    name,
                    "unexpected <{}> in <{}>, expected <{}>".format(
                        name, local_name(group), message_tag
                    ),
                )
            for segment in child:
                if not isinstance(segment.tag, str):
                    continue
                tag = local_name(segment)
                segments.append(
                    encode_segment(SegmentType(tag, "{} segment".format(tag)), segment, context)
                )
        return segments

    return step


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------


class EnvelopeState(enum.Enum):
    """Progress of one envelope run."""

    AWAITING_ADVICE = "awaiting_advice"
    HEADER_EMITTED = "header_emitted"
    GROUP_HEADER_ATTEMPTED = "group_header_attempted"
    GROUP_BODY = "group_body"
    GROUP_TRAILER_ATTEMPTED = "group_trailer_attempted"
    TRAILER_EMITTED = "trailer_emitted"
    ABORTED = "aborted"


@dataclass(frozen=True)
class EnvelopeSteps:
    """The per-dialect behavior of every envelope step.

    WHY: The driver owns the order; a dialect owns what each step does.
    Bundling the step callables in a frozen value keeps dialects as plain
    data that can be registered, compared and swapped in tests.

    RULES:
    - interchange_settings, interchange_header and interchange_trailer
      receive the interchange root
    - group_header, group_body and group_trailer receive one group node
    - group_tag: local name of the functional group container
    - interchange_tags: local names of the interchange header and trailer;
      with group_tag, the only children the interchange root may hold
    """

    interchange_settings: Step
    interchange_header: Step
    group_header: Step
    group_body: BodyStep
    group_trailer: Step
    interchange_trailer: Step
    group_tag: str = "Group"
    interchange_tags: Collection[str] = ()


def _check_interchange_children(steps: EnvelopeSteps, tree: Element) -> None:
    allowed = set(steps.interchange_tags) | {steps.group_tag}
    for child in tree:
        if not isinstance(child.tag, str):
            continue
        name = local_name(child)
        if name not in allowed:
            raise SegmentFormatError(
                name,
                "unexpected <{}> in <{}>, expected <{}>".format(
                    name, local_name(tree), ">, <".join(sorted(allowed))
                ),
            )


def run_envelope(
    steps: EnvelopeSteps,
    tree: Element,
    context: SeparatorContext,
) -> List[str]:
    """Run the envelope steps over *tree* in the fixed order.

    Args:
        steps: The dialect's step implementations.
        tree: The interchange root node.
        context: Validated separators for this encode.

    Returns:
        Encoded strings in stream order, without segment terminators
        (the separator advice, when present, is first).

    Raises:
        SegmentNotFoundError: If a mandatory segment is missing.
        SegmentFormatError: If any segment node is malformed or the root
            holds a child the steps do not know.
    """
    result: List[str] = []
    state = EnvelopeState.AWAITING_ADVICE

    def emit(text: Optional[str]) -> None:
        if text is not None:
            result.append(text)

    try:
        _check_interchange_children(steps, tree)
        emit(steps.interchange_settings(tree, context))
        emit(steps.interchange_header(tree, context))
        state = EnvelopeState.HEADER_EMITTED

        for group in iter_children(tree, steps.group_tag):
            state = EnvelopeState.GROUP_HEADER_ATTEMPTED
            emit(steps.group_header(group, context))
            state = EnvelopeState.GROUP_BODY
            result.extend(steps.group_body(group, context))
            state = EnvelopeState.GROUP_TRAILER_ATTEMPTED
            emit(steps.group_trailer(group, context))

        emit(steps.interchange_trailer(tree, context))
        state = EnvelopeState.TRAILER_EMITTED
    except EnvelopeError as exc:
        logger.debug(
            "Envelope run %s -> %s: %s",
            state.value, EnvelopeState.ABORTED.value, exc,
        )
        raise

    logger.debug("Envelope run %s with %d entries", state.value, len(result))
    return result
