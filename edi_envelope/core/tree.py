"""Tree lookup helpers over the XML interchange representation.

WHY: The envelope steps need to find one named control segment (UNB,
UNG, ...) among the children of the interchange or a group. XML produced
by other tools may carry a namespace, so a plain ElementTree.find() on
the bare tag would miss it.

HOW: Compare local names (the part after "}" in "{uri}UNB") of direct
children only. The tree is never modified.

RULES:
- Only direct children are searched, never descendants
- The first match in document order wins
- Namespaces are ignored for matching
"""

from __future__ import annotations

from typing import Iterator, Optional
from xml.etree.ElementTree import Element


def local_name(node: Element) -> str:
    """Return the tag of *node* without any "{namespace}" prefix."""
    tag = node.tag
    if isinstance(tag, str) and tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def iter_children(subtree: Element, tag: str) -> Iterator[Element]:
    """Yield the direct children of *subtree* whose local name is *tag*."""
    for child in subtree:
        if local_name(child) == tag:
            yield child


def find_segment(subtree: Element, tag: str) -> Optional[Element]:
    """Return the first direct child named *tag*, or None when absent."""
    return next(iter_children(subtree, tag), None)
