"""Tests for the X12 envelope steps.

WHY: X12 differs from EDIFACT in exactly the places the driver
abstracts: no advice string, separators embedded in ISA, and mandatory
GS/GE group boundaries. These tests pin those differences.
"""

import pytest

from edi_envelope.core.separators import SeparatorOverride
from edi_envelope.encoder import encode_interchange
from edi_envelope.errors import SegmentFormatError, SegmentNotFoundError

from conftest import (
    GE_EDI,
    GE_XML,
    GS_EDI,
    GS_XML,
    IEA_EDI,
    IEA_XML,
    ISA_EDI,
    ISA_VALUES,
    ISA_XML,
    X12_MESSAGE_EDI,
    X12_MESSAGE_XML,
)


def _isa_xml(values):
    return "<ISA>{}</ISA>".format(
        "".join("<ISA{0:02d}>{1}</ISA{0:02d}>".format(i, v) for i, v in enumerate(values, 1))
    )


class TestX12Envelope:
    """ISA/GS/GE/IEA assembly."""

    def test_full_interchange(self, x12_tree):
        result = encode_interchange(x12_tree, dialect="x12")
        assert result == [ISA_EDI, GS_EDI] + X12_MESSAGE_EDI + [GE_EDI, IEA_EDI]

    def test_no_advice_with_custom_separators(self, x12_tree):
        override = SeparatorOverride(component=":", data="|", terminator="\n")
        result = encode_interchange(x12_tree, override, dialect="x12")
        assert result[0].startswith("ISA|00|")
        assert result[0].endswith("|P|:")
        assert result[1] == "GS|PO|SENDER|RECEIVER|20200102|1000|1|X|004010"

    def test_zero_groups(self, interchange_builder):
        tree = interchange_builder(ISA_XML, IEA_XML)
        assert encode_interchange(tree, dialect="x12") == [ISA_EDI, IEA_EDI]

    def test_repetition_separator_written_from_version_00403(self, interchange_builder):
        values = list(ISA_VALUES)
        values[11] = "00501"
        tree = interchange_builder(_isa_xml(values), IEA_XML)
        isa = encode_interchange(tree, SeparatorOverride(release="!"), dialect="x12")[0]
        fields = isa.split("*")
        assert fields[11] == "!"
        assert fields[12] == "00501"
        assert fields[16] == ">"

    def test_repetition_separator_in_tree_isa11_accepted(self, interchange_builder):
        values = list(ISA_VALUES)
        values[10] = "^"
        values[11] = "00501"
        tree = interchange_builder(_isa_xml(values), IEA_XML)
        isa = encode_interchange(tree, dialect="x12")[0]
        assert isa.split("*")[11:13] == ["^", "00501"]

    def test_isa11_replaced_by_custom_repetition_separator(self, interchange_builder):
        values = list(ISA_VALUES)
        values[10] = "^"
        values[11] = "00501"
        tree = interchange_builder(_isa_xml(values), IEA_XML)
        isa = encode_interchange(tree, SeparatorOverride(release="!"), dialect="x12")[0]
        assert isa.split("*")[11] == "!"

    def test_isa_fields_not_trimmed(self, x12_tree):
        isa = encode_interchange(x12_tree, dialect="x12")[0]
        assert "*SENDER         *" in isa


class TestX12Failures:
    """Every X12 envelope segment is mandatory."""

    def test_missing_isa(self, interchange_builder):
        with pytest.raises(SegmentNotFoundError) as exc_info:
            encode_interchange(interchange_builder(IEA_XML), dialect="x12")
        assert exc_info.value.tag == "ISA"

    def test_missing_iea(self, interchange_builder):
        with pytest.raises(SegmentNotFoundError) as exc_info:
            encode_interchange(interchange_builder(ISA_XML), dialect="x12")
        assert exc_info.value.tag == "IEA"

    def test_missing_gs(self, interchange_builder, group_builder):
        tree = interchange_builder(ISA_XML, group_builder(X12_MESSAGE_XML, GE_XML), IEA_XML)
        with pytest.raises(SegmentNotFoundError) as exc_info:
            encode_interchange(tree, dialect="x12")
        assert exc_info.value.tag == "GS"

    def test_missing_ge(self, interchange_builder, group_builder):
        tree = interchange_builder(ISA_XML, group_builder(GS_XML, X12_MESSAGE_XML), IEA_XML)
        with pytest.raises(SegmentNotFoundError) as exc_info:
            encode_interchange(tree, dialect="x12")
        assert exc_info.value.tag == "GE"

    def test_transaction_set_outside_group(self, interchange_builder):
        tree = interchange_builder(ISA_XML, X12_MESSAGE_XML, IEA_XML)
        with pytest.raises(SegmentFormatError, match="unexpected <Message>"):
            encode_interchange(tree, dialect="x12")

    def test_isa_wrong_element_count(self, interchange_builder):
        tree = interchange_builder(_isa_xml(ISA_VALUES[:14]), IEA_XML)
        with pytest.raises(SegmentFormatError, match="expected 15"):
            encode_interchange(tree, dialect="x12")

    def test_isa_composite_rejected(self, interchange_builder):
        values = list(ISA_VALUES)
        values[0] = "<a>0</a><b>0</b>"
        tree = interchange_builder(_isa_xml(values), IEA_XML)
        with pytest.raises(SegmentFormatError, match="simple data element"):
            encode_interchange(tree, dialect="x12")

    def test_delimiter_in_data_rejected(self, interchange_builder, group_builder):
        message = "<Message><N1><N101>ST</N101><N102>A*B</N102></N1></Message>"
        tree = interchange_builder(ISA_XML, group_builder(GS_XML, message, GE_XML), IEA_XML)
        with pytest.raises(SegmentFormatError, match="cannot be escaped"):
            encode_interchange(tree, dialect="x12")

    def test_repetition_character_rejected_before_00403(self, interchange_builder, group_builder):
        # ISA_VALUES is version 00401; the fourth character is still refused.
        message = "<Message><N1><N101>ST</N101><N102>A^B</N102></N1></Message>"
        tree = interchange_builder(ISA_XML, group_builder(GS_XML, message, GE_XML), IEA_XML)
        with pytest.raises(SegmentFormatError, match=r"control character '\^'"):
            encode_interchange(tree, dialect="x12")
