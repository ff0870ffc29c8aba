"""Tests for parse statistics."""

import json

from roget.bloom import bloom_sections
from roget.model import Entry, FlagTag, Group, Section, Subsection, WordClass
from roget.sections import scan_sections
from roget.stats import ParseStats, collect_stats, iter_entries


def bloomed_sample(sample_lines, config):
    sections = scan_sections(sample_lines, config)
    bloom_sections(sections, config)
    return sections


class TestCollectStats:
    """Counts over the sample file."""

    def test_sample_counts(self, sample_lines, config):
        stats = collect_stats(bloomed_sample(sample_lines, config))
        assert stats.sections == 3
        assert stats.sections_with_minor == 1
        assert stats.sections_with_comments == 1
        assert stats.subsections == 8
        assert stats.raw_subsections == 0
        assert stats.groups == 14
        assert stats.entries == 27
        assert stats.unparsed_entries == 0
        assert stats.flagged_entries == 1
        assert stats.unknown_subsections == 0
        assert stats.word_class_counts == {"N": 4, "V": 1, "Adj": 3}
        assert stats.flag_counts == {"obsolete_1911": 1}

    def test_raw_subsections_before_bloom(self, sample_lines, config):
        stats = collect_stats(scan_sections(sample_lines, config))
        assert stats.raw_subsections == 8
        assert stats.subsections == 0
        assert stats.entries == 0

    def test_unparsed_and_unknown(self):
        section = Section(
            id="5",
            major=5,
            minor="",
            name="Odd",
            subsections=[
                Subsection(WordClass.UNKNOWN, [Group([Entry("UNPARSED"), Entry("x", {FlagTag.ARCHAIC_1991})])]),
            ],
        )
        stats = collect_stats({"5": section})
        assert stats.unparsed_entries == 1
        assert stats.unknown_subsections == 1
        assert stats.unknown_by_section == {"5": 1}
        assert stats.flag_counts == {"archaic_1991": 1}

    def test_iter_entries_skips_raw(self, sample_lines, config):
        sections = scan_sections(sample_lines, config)
        assert list(iter_entries(sections.values())) == []


class TestReport:
    """JSON and text output."""

    def test_to_json_is_bytes(self):
        assert isinstance(ParseStats().to_json(), bytes)

    def test_write_to_file(self, sample_lines, config, temp_dir):
        stats = collect_stats(bloomed_sample(sample_lines, config))
        path = temp_dir / "stats.json"
        stats.write_to_file(str(path))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert set(data) == {"summary", "word_classes", "flags", "unknown_by_section"}
        assert data["summary"]["entries"] == 27
        assert data["word_classes"]["N"] == 4
        assert data["flags"] == {"obsolete_1911": 1}

    def test_summary_text(self, sample_lines, config):
        summary = collect_stats(bloomed_sample(sample_lines, config)).summary()
        assert "Sections:" in summary
        assert "27" in summary
