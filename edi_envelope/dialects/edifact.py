"""EDIFACT envelope steps (UNA, UNB, UNG, UNE, UNZ).

WHY: In UN/EDIFACT the interchange envelope (UNB/UNZ) is mandatory but
functional groups are optional: messages may sit in a group with no
UNG/UNE at all. A non-default set of separators must be announced with
a leading UNA service string advice.

HOW: Builds an EnvelopeSteps value from the generic step factories:
separator advice first, mandatory UNB/UNZ, optional UNG/UNE, and the
generic message body for everything between them.

RULES:
- UNA only when separators differ from ":+?'" defaults
- A group without UNG/UNE contributes only its messages
- A malformed UNG/UNE still aborts the encode
- Only UNB, UNZ and Group may sit directly under the interchange root
"""

from __future__ import annotations

from edi_envelope.core.envelope import (
    EnvelopeSteps,
    mandatory_segment,
    message_body,
    optional_segment,
    separator_advice,
)
from edi_envelope.core.segments import SegmentType

UNB = SegmentType(tag="UNB", name="interchange header", max_elements=11)
UNG = SegmentType(tag="UNG", name="functional group header", max_elements=8)
UNE = SegmentType(tag="UNE", name="functional group trailer", max_elements=2)
UNZ = SegmentType(tag="UNZ", name="interchange trailer", max_elements=2)

EDIFACT_STEPS = EnvelopeSteps(
    interchange_settings=separator_advice,
    interchange_header=mandatory_segment(UNB),
    group_header=optional_segment(UNG),
    group_body=message_body("Message", (UNG.tag, UNE.tag)),
    group_trailer=optional_segment(UNE),
    interchange_trailer=mandatory_segment(UNZ),
    interchange_tags=(UNB.tag, UNZ.tag),
)
