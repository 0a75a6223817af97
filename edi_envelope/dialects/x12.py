"""X12 envelope steps (ISA, GS, GE, IEA).

WHY: X12 declares its delimiters inside the fixed-width ISA header, so
it never writes a separate advice string. Unlike EDIFACT, every
transaction set must sit inside a GS/GE functional group, so the group
boundaries are mandatory too.

HOW: GS, GE and IEA use the generic mandatory step. ISA gets its own
step: the tree supplies ISA01–ISA15, and the step writes the separators
into the positions the standard reserves for them (ISA11 repetition
separator from version 00403 on, ISA16 component separator). Separators
cannot appear as data in X12, so they are placed after encoding.

RULES:
- No separator advice, whatever the separators
- ISA, GS, GE and IEA absence aborts the encode
- ISA takes exactly 15 simple data elements; values are written as given
  (no trimming: ISA fields are fixed-length, padding is the tree's job)
- From 00403 on, the tree's ISA11 value is replaced by the repetition
  separator and is never checked as data
"""

from __future__ import annotations

from typing import Optional
from xml.etree.ElementTree import Element

from edi_envelope.core.envelope import (
    EnvelopeSteps,
    mandatory_segment,
    message_body,
    separator_advice,
)
from edi_envelope.core.segments import SegmentType, escape_value
from edi_envelope.core.separators import SeparatorContext
from edi_envelope.core.tree import find_segment, local_name
from edi_envelope.errors import SegmentFormatError, SegmentNotFoundError

ISA = SegmentType(tag="ISA", name="interchange control header", max_elements=15)
GS = SegmentType(tag="GS", name="functional group header", max_elements=8)
GE = SegmentType(tag="GE", name="functional group trailer", max_elements=2)
IEA = SegmentType(tag="IEA", name="interchange control trailer", max_elements=2)

# ISA11 became the repetition separator in version 00403.
REPETITION_SEPARATOR_VERSION = "00403"


def interchange_control_header(subtree: Element, context: SeparatorContext) -> Optional[str]:
    """Encode ISA with the context's separators in their reserved positions."""
    node = find_segment(subtree, ISA.tag)
    if node is None:
        raise SegmentNotFoundError(
            ISA.tag,
            "Mandatory {} ({}) not found under <{}>".format(ISA.name, ISA.tag, local_name(subtree)),
        )

    elements = [child for child in node if isinstance(child.tag, str)]
    if len(elements) != ISA.max_elements:
        raise SegmentFormatError(
            ISA.tag,
            "expected {} data elements before the component separator, got {}".format(
                ISA.max_elements, len(elements)
            ),
        )

    for element in elements:
        if len(element):
            raise SegmentFormatError(
                ISA.tag, "<{}> must be a simple data element".format(local_name(element))
            )
    raw = [element.text or "" for element in elements]

    # From 00403 ISA11 holds the repetition separator itself; the tree's
    # value is replaced, so it is not checked as data.
    repetition_slot = 10 if raw[11] >= REPETITION_SEPARATOR_VERSION else None

    values = [
        context.release if index == repetition_slot else escape_value(ISA.tag, value, context)
        for index, value in enumerate(raw)
    ]

    return context.data.join([ISA.tag] + values + [context.component])


X12_STEPS = EnvelopeSteps(
    interchange_settings=separator_advice,
    interchange_header=interchange_control_header,
    group_header=mandatory_segment(GS),
    group_body=message_body("Message", (GS.tag, GE.tag)),
    group_trailer=mandatory_segment(GE),
    interchange_trailer=mandatory_segment(IEA),
    interchange_tags=(ISA.tag, IEA.tag),
)
