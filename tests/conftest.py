"""Shared test fixtures for the edi_envelope test suite.

WHY: Most test modules need the same sample interchanges: an EDIFACT
ORDERS interchange with and without functional group boundaries, and an
X12 850 interchange. Centralizing the XML here keeps every module
encoding the same trees and comparing against the same expected text.

HOW: Segment XML snippets are module constants; build_interchange()
stitches them into an Interchange document and parses it. Fixtures wrap
the common shapes.

RULES:
- Expected encodings (the *_EDI constants) use the dialect defaults
- Trees are parsed fresh for every test (no shared mutable state)
"""

from typing import Callable, Sequence
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

import pytest


# ---------------------------------------------------------------------------
# EDIFACT sample segments
# ---------------------------------------------------------------------------

UNB_XML = (
    "<UNB>"
    "<S001><E0001>UNOC</E0001><E0002>3</E0002></S001>"
    "<S002><E0004>SENDER1</E0004><E0007>14</E0007></S002>"
    "<S003><E0010>RECEIVER1</E0010><E0007>14</E0007></S003>"
    "<S004><E0017>200102</E0017><E0019>1000</E0019></S004>"
    "<E0020>REF001</E0020>"
    "</UNB>"
)
UNB_EDI = "UNB+UNOC:3+SENDER1:14+RECEIVER1:14+200102:1000+REF001"

UNG_XML = (
    "<UNG>"
    "<E0038>ORDERS</E0038>"
    "<S006><E0040>SENDER1</E0040></S006>"
    "<S007><E0044>RECEIVER1</E0044></S007>"
    "<S004><E0017>200102</E0017><E0019>1000</E0019></S004>"
    "<E0048>GRP01</E0048>"
    "<E0051>UN</E0051>"
    "<S008><E0052>D</E0052><E0054>96A</E0054></S008>"
    "</UNG>"
)
UNG_EDI = "UNG+ORDERS+SENDER1+RECEIVER1+200102:1000+GRP01+UN+D:96A"

MESSAGE_XML = (
    "<Message>"
    "<UNH><E0062>1</E0062>"
    "<S009><E0065>ORDERS</E0065><E0052>D</E0052><E0054>96A</E0054><E0051>UN</E0051></S009>"
    "</UNH>"
    "<BGM><C002><E1001>220</E1001></C002><E1004>PO123</E1004></BGM>"
    "<UNT><E0074>3</E0074><E0062>1</E0062></UNT>"
    "</Message>"
)
MESSAGE_EDI = ["UNH+1+ORDERS:D:96A:UN", "BGM+220+PO123", "UNT+3+1"]

UNE_XML = "<UNE><E0060>1</E0060><E0048>GRP01</E0048></UNE>"
UNE_EDI = "UNE+1+GRP01"

UNZ_XML = "<UNZ><E0036>1</E0036><E0020>REF001</E0020></UNZ>"
UNZ_EDI = "UNZ+1+REF001"


# ---------------------------------------------------------------------------
# X12 sample segments
# ---------------------------------------------------------------------------

ISA_VALUES = [
    "00", "          ", "00", "          ", "ZZ", "SENDER         ",
    "ZZ", "RECEIVER       ", "200102", "1000", "U", "00401",
    "000000001", "0", "P",
]
ISA_XML = "<ISA>{}</ISA>".format(
    "".join("<ISA{0:02d}>{1}</ISA{0:02d}>".format(i, v) for i, v in enumerate(ISA_VALUES, 1))
)
ISA_EDI = "ISA*" + "*".join(ISA_VALUES) + "*>"

GS_XML = (
    "<GS><GS01>PO</GS01><GS02>SENDER</GS02><GS03>RECEIVER</GS03>"
    "<GS04>20200102</GS04><GS05>1000</GS05><GS06>1</GS06>"
    "<GS07>X</GS07><GS08>004010</GS08></GS>"
)
GS_EDI = "GS*PO*SENDER*RECEIVER*20200102*1000*1*X*004010"

X12_MESSAGE_XML = (
    "<Message>"
    "<ST><ST01>850</ST01><ST02>0001</ST02></ST>"
    "<BEG><BEG01>00</BEG01><BEG02>SA</BEG02><BEG03>PO123</BEG03><BEG04/><BEG05>20200102</BEG05></BEG>"
    "<SE><SE01>3</SE01><SE02>0001</SE02></SE>"
    "</Message>"
)
X12_MESSAGE_EDI = ["ST*850*0001", "BEG*00*SA*PO123**20200102", "SE*3*0001"]

GE_XML = "<GE><GE01>1</GE01><GE02>1</GE02></GE>"
GE_EDI = "GE*1*1"

IEA_XML = "<IEA><IEA01>1</IEA01><IEA02>000000001</IEA02></IEA>"
IEA_EDI = "IEA*1*000000001"


def build_interchange(*parts: str) -> Element:
    """Parse an Interchange document made of the given XML snippets."""
    return ElementTree.fromstring("<Interchange>{}</Interchange>".format("".join(parts)))


def group(*parts: str) -> str:
    """Wrap XML snippets in a Group element."""
    return "<Group>{}</Group>".format("".join(parts))


@pytest.fixture
def interchange_builder() -> Callable[..., Element]:
    return build_interchange


@pytest.fixture
def group_builder() -> Callable[..., str]:
    return group


@pytest.fixture
def edifact_tree() -> Element:
    """EDIFACT interchange with one fully enveloped group and one message."""
    return build_interchange(UNB_XML, group(UNG_XML, MESSAGE_XML, UNE_XML), UNZ_XML)


@pytest.fixture
def edifact_tree_without_groups() -> Element:
    """EDIFACT interchange with only UNB and UNZ."""
    return build_interchange(UNB_XML, UNZ_XML)


@pytest.fixture
def edifact_tree_bare_group() -> Element:
    """EDIFACT interchange whose group has no UNG/UNE."""
    return build_interchange(UNB_XML, group(MESSAGE_XML), UNZ_XML)


@pytest.fixture
def x12_tree() -> Element:
    """X12 850 interchange with one functional group."""
    return build_interchange(ISA_XML, group(GS_XML, X12_MESSAGE_XML, GE_XML), IEA_XML)


@pytest.fixture
def edifact_expected() -> Sequence[str]:
    """Default-separator encoding of edifact_tree."""
    return [UNB_EDI, UNG_EDI] + MESSAGE_EDI + [UNE_EDI, UNZ_EDI]
