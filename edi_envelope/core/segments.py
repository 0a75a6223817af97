"""Generic field-delimited segment encoder.

WHY: Every segment of an interchange, envelope or business content, is
written the same way: the tag, then its data elements separated by the
data element separator, composites split by the component separator,
and any separator character inside a value escaped (EDIFACT) or refused
(X12). The envelope steps only decide WHICH node to encode; this module
decides HOW.

HOW: A segment node's element children are its data elements in
positional order. A data element with children is a composite; its
children are components. Trailing empty data elements and components are
dropped, as both standards require.

RULES:
- The node's local tag must match the SegmentType tag
- No more data elements than SegmentType.max_elements (None = no limit)
- Composites nest exactly one level; deeper nesting is malformed
- An element carrying both text and children is malformed
- Output never includes the segment terminator
- X12 data may contain none of the four context characters, including
  the repetition separator in interchanges older than 00403 where it is
  not yet a delimiter (the encoder does not read the ISA version)
- A None node raises SegmentNotFoundError, never SegmentFormatError
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
from xml.etree.ElementTree import Element

from edi_envelope.core.separators import SeparatorContext
from edi_envelope.core.tree import local_name
from edi_envelope.errors import SegmentFormatError, SegmentNotFoundError


@dataclass(frozen=True)
class SegmentType:
    """Descriptor of one segment kind passed to the encoder.

    RULES:
    - tag: segment tag as written in EDI and as the XML local name
    - name: human-readable name, used in error messages and logs
    - max_elements: upper bound on data elements, or None
    """

    tag: str
    name: str
    max_elements: Optional[int] = None


def _element_children(node: Element) -> List[Element]:
    # Comments and processing instructions have non-string tags.
    return [child for child in node if isinstance(child.tag, str)]


def _has_own_text(node: Element) -> bool:
    return bool(node.text and node.text.strip())


def _trim_trailing_empty(values: List[str]) -> List[str]:
    end = len(values)
    while end and values[end - 1] == "":
        end -= 1
    return values[:end]


def escape_value(tag: str, value: str, context: SeparatorContext) -> str:
    """Make *value* safe to write between separators.

    WHY: A separator character inside data would split the value on the
    receiving side. EDIFACT prefixes such characters with the release
    indicator (including the release indicator itself); X12 has no
    release character, so such data cannot be represented.

    Raises:
        SegmentFormatError: If the dialect cannot escape and the value
            contains a control character.
    """
    controls = context.separators
    if context.spec.release_escapes:
        return "".join(
            context.release + ch if ch in controls else ch
            for ch in value
        )

    for ch in value:
        if ch in controls:
            raise SegmentFormatError(
                tag,
                "value {!r} contains control character {!r} and {} data cannot be escaped".format(
                    value, ch, context.dialect
                ),
            )
    return value


def _encode_data_element(tag: str, element: Element, context: SeparatorContext) -> str:
    components = _element_children(element)
    if not components:
        return escape_value(tag, element.text or "", context)

    if _has_own_text(element):
        raise SegmentFormatError(
            tag, "composite <{}> mixes text and components".format(local_name(element))
        )

    values: List[str] = []
    for component in components:
        if _element_children(component):
            raise SegmentFormatError(
                tag,
                "component <{}> of <{}> has children; composites nest only one level".format(
                    local_name(component), local_name(element)
                ),
            )
        values.append(escape_value(tag, component.text or "", context))

    return context.component.join(_trim_trailing_empty(values))


def encode_segment(
    segment_type: SegmentType,
    node: Optional[Element],
    context: SeparatorContext,
) -> str:
    """Encode one segment node into its EDI text, without the terminator.

    Args:
        segment_type: Descriptor of the expected segment.
        node: The located segment node, or None if the lookup found nothing.
        context: Effective separators for this interchange.

    Returns:
        The encoded segment, e.g. ``UNZ+1+REF001``.

    Raises:
        SegmentNotFoundError: If *node* is None.
        SegmentFormatError: If the node does not match the descriptor or
            its content cannot be written with these separators.
    """
    if node is None:
        raise SegmentNotFoundError(segment_type.tag)

    tag = local_name(node)
    if tag != segment_type.tag:
        raise SegmentFormatError(
            segment_type.tag,
            "expected a <{}> node, got <{}>".format(segment_type.tag, tag),
        )

    if _has_own_text(node):
        raise SegmentFormatError(tag, "segment node has text outside its data elements")

    children = _element_children(node)
    if segment_type.max_elements is not None and len(children) > segment_type.max_elements:
        raise SegmentFormatError(
            tag,
            "{} has {} data elements, at most {} allowed".format(
                segment_type.name, len(children), segment_type.max_elements
            ),
        )

    elements = [_encode_data_element(tag, child, context) for child in children]
    return context.data.join([tag] + _trim_trailing_empty(elements))
