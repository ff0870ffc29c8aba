"""
roget - parse Project Gutenberg's Roget's Thesaurus into Python records.

Modules:
    parser:   parse_roget() / parse_sections() entry points
    sections: phase one, logical lines grouped into numbered sections
    bloom:    phase two, sections expanded into subsections, groups, entries
    fields:   quote-aware field splitter used by the bloom pass
    model:    Section, Subsection, Group, Entry records and their enums
    config:   YAML configuration (schema/roget.yaml)
    stats:    parse-quality statistics

Usage:
    from roget import parse_roget

    sections = parse_roget("roget15a.txt")
    print(sections["1"].subsections[0].groups[0].entries[0].text)  # existence
"""

from roget.errors import (
    ConfigError,
    HeaderCorruptionError,
    OrphanLineError,
    ParseError,
    RogetError,
)
from roget.model import (
    Entry,
    FlagTag,
    Group,
    RawSubsection,
    Section,
    Subsection,
    WordClass,
)
from roget.parser import parse_roget, parse_sections

__all__ = [
    "parse_roget",
    "parse_sections",
    "Section",
    "RawSubsection",
    "Subsection",
    "Group",
    "Entry",
    "WordClass",
    "FlagTag",
    "RogetError",
    "ParseError",
    "HeaderCorruptionError",
    "OrphanLineError",
    "ConfigError",
]
