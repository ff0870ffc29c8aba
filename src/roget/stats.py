"""Statistics about a parsed thesaurus.

Measures how much of the source text resisted parsing:
- Subsections whose word class could not be determined (Unknown)
- Entries that came out empty (UNPARSED)
- Flag and word-class distribution
- Sections carrying bracketed comments

The report is written separately from the parse result and is meant for
tracking parser improvements between revisions of the source file.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple

import orjson

from roget.model import UNPARSED, Entry, Group, Section, Subsection, WordClass


def iter_entries(sections: Iterable[Section]) -> Iterator[Tuple[Section, Subsection, Group, Entry]]:
    """Yield (section, subsection, group, entry) for every bloomed entry."""
    for section in sections:
        for subsection in section.subsections:
            if not isinstance(subsection, Subsection):
                continue
            for group in subsection.groups:
                for entry in group.entries:
                    yield section, subsection, group, entry


@dataclass
class ParseStats:
    """Accumulator for parse statistics."""

    sections: int = 0
    sections_with_minor: int = 0
    sections_with_comments: int = 0
    subsections: int = 0
    raw_subsections: int = 0
    groups: int = 0
    entries: int = 0
    unparsed_entries: int = 0
    flagged_entries: int = 0

    # Word class distribution (Unknown included)
    word_class_counts: Counter = field(default_factory=Counter)

    # Flag distribution
    flag_counts: Counter = field(default_factory=Counter)

    # Sections holding Unknown subsections, for spot checks
    unknown_by_section: Counter = field(default_factory=Counter)

    def record_section(self, section: Section, unparsed: str = UNPARSED) -> None:
        self.sections += 1
        if section.minor:
            self.sections_with_minor += 1
        if section.comments:
            self.sections_with_comments += 1

        for subsection in section.subsections:
            if not isinstance(subsection, Subsection):
                self.raw_subsections += 1
                continue
            self.subsections += 1
            self.word_class_counts[subsection.type.value] += 1
            if subsection.type is WordClass.UNKNOWN:
                self.unknown_by_section[section.id] += 1
            self.groups += len(subsection.groups)

        for _, _, _, entry in iter_entries([section]):
            self.entries += 1
            if entry.text == unparsed:
                self.unparsed_entries += 1
            if entry.flags:
                self.flagged_entries += 1
            for flag in entry.flags:
                self.flag_counts[flag.value] += 1

    @property
    def unknown_subsections(self) -> int:
        return self.word_class_counts.get(WordClass.UNKNOWN.value, 0)

    def to_dict(self, top_n: Optional[int] = 20) -> Dict:
        """Convert stats to a JSON-serializable dict."""
        return {
            "summary": {
                "sections": self.sections,
                "sections_with_minor": self.sections_with_minor,
                "sections_with_comments": self.sections_with_comments,
                "subsections": self.subsections,
                "raw_subsections": self.raw_subsections,
                "groups": self.groups,
                "entries": self.entries,
                "unparsed_entries": self.unparsed_entries,
                "flagged_entries": self.flagged_entries,
                "unknown_subsections": self.unknown_subsections,
            },
            "word_classes": dict(self.word_class_counts.most_common()),
            "flags": dict(self.flag_counts.most_common()),
            "unknown_by_section": dict(self.unknown_by_section.most_common(top_n)),
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict(), option=orjson.OPT_INDENT_2)

    def write_to_file(self, path: str) -> None:
        """Write stats to a JSON file."""
        with open(path, "wb") as f:
            f.write(self.to_json())

    def summary(self) -> str:
        """Return a human-readable summary."""
        lines = [
            f"  Sections:            {self.sections:,}",
            f"  Subsections:         {self.subsections:,}",
            f"  Groups:              {self.groups:,}",
            f"  Entries:             {self.entries:,}",
            f"  Unknown subsections: {self.unknown_subsections:,}",
            f"  UNPARSED entries:    {self.unparsed_entries:,}",
            f"  Flagged entries:     {self.flagged_entries:,}",
        ]
        return "\n".join(lines)


def collect_stats(sections: Dict[str, Section], unparsed: str = UNPARSED) -> ParseStats:
    """Compute statistics over a parse result."""
    stats = ParseStats()
    for section in sections.values():
        stats.record_section(section, unparsed=unparsed)
    return stats
