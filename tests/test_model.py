"""Tests for the parse result records."""

import pytest

from roget.errors import HeaderCorruptionError
from roget.model import (
    UNPARSED,
    Entry,
    FlagTag,
    Group,
    RawSubsection,
    Section,
    Subsection,
    WordClass,
    parse_section_id,
    sections_to_dict,
)


class TestParseSectionId:
    @pytest.mark.parametrize(
        "section_id,expected",
        [("1", (1, "")), ("100a", (100, "a")), ("1000z", (1000, "z"))],
    )
    def test_valid(self, section_id, expected):
        assert parse_section_id(section_id) == expected

    @pytest.mark.parametrize("section_id", ["", "a1", "1A", "12ab", "0", "0a"])
    def test_invalid(self, section_id):
        with pytest.raises(HeaderCorruptionError):
            parse_section_id(section_id)

    @pytest.mark.parametrize("section_id", ["007", "012b"])
    def test_leading_zeros_rejected(self, section_id):
        with pytest.raises(HeaderCorruptionError, match="leading zeros"):
            parse_section_id(section_id)


class TestEnums:
    def test_word_class_compares_as_string(self):
        assert WordClass.NOUN == "N"
        assert str(WordClass.ADJECTIVE) == "Adj"
        assert WordClass("Pron") is WordClass.PRONOUN

    def test_unknown_spelling(self):
        assert WordClass.UNKNOWN.value == "Unknown"

    def test_flag_values(self):
        assert {flag.value for flag in FlagTag} == {"archaic_1991", "obsolete_1991", "obsolete_1911"}


class TestRecords:
    """Constructor checks and dict views."""

    def test_entry_requires_text(self):
        with pytest.raises(ValueError):
            Entry("")

    def test_entry_flags_sorted_in_dict(self):
        entry = Entry("thee", {FlagTag.OBSOLETE_1911, FlagTag.ARCHAIC_1991})
        assert entry.to_dict() == {"text": "thee", "flags": ["archaic_1991", "obsolete_1911"]}

    def test_unparsed_placeholder_is_valid_text(self):
        assert Entry(UNPARSED).text == "UNPARSED"

    def test_group_requires_entries(self):
        with pytest.raises(ValueError):
            Group([])

    def test_subsection_dict(self):
        subsection = Subsection(WordClass.VERB, [Group([Entry("exist")])])
        assert subsection.to_dict() == {
            "type": "V",
            "groups": [{"entries": [{"text": "exist", "flags": []}]}],
        }

    def test_raw_subsection_dict(self):
        assert RawSubsection("N. being.").to_dict() == {"text": "N. being."}


class TestSection:
    def test_from_header(self):
        section = Section.from_header("100a", "Fraction", ["Less than one"], "N. fraction.")
        assert (section.id, section.major, section.minor) == ("100a", 100, "a")
        assert section.comments == ["Less than one"]
        assert section.subsections == [RawSubsection("N. fraction.")]
        assert not section.is_bloomed

    def test_from_header_copies_comments(self):
        comments = ["aside"]
        section = Section.from_header("1", "Existence", comments)
        comments.append("later")
        assert section.comments == ["aside"]

    def test_zero_major_rejected(self):
        with pytest.raises(HeaderCorruptionError):
            Section(id="0", major=0, minor="", name="Nothing")

    def test_id_must_match_major_and_minor(self):
        with pytest.raises(HeaderCorruptionError):
            Section(id="12b", major=12, minor="", name="Mismatch")

    def test_is_bloomed(self):
        section = Section(id="1", major=1, minor="", name="Existence")
        section.subsections.append(Subsection(WordClass.NOUN, [Group([Entry("being")])]))
        assert section.is_bloomed

    def test_sections_to_dict(self):
        section = Section(id="2", major=2, minor="", name="Inexistence", subsections=[RawSubsection("")])
        assert sections_to_dict({"2": section}) == {
            "2": {
                "major": 2,
                "minor": "",
                "name": "Inexistence",
                "comments": [],
                "subsections": [{"text": ""}],
            }
        }
