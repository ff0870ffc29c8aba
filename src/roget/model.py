"""
Records produced by the Roget parser.

The parse result is a single tree:

    dict[str, Section]
      Section.subsections -> [Subsection]      (after bloom)
        Subsection.groups -> [Group]           (";"-separated)
          Group.entries   -> [Entry]           (","-separated)

Before the bloom pass a section's subsections are RawSubsection records that
hold only the unsplit text of one logical line.

Every record has a to_dict() view with the same shape the structure is
usually stored in:

    '100a': {
        'major': 100, 'minor': 'a', 'name': 'Fraction',
        'comments': ['Less than one'],
        'subsections': [
            {'type': 'N', 'groups': [
                {'entries': [{'text': 'fraction', 'flags': []}, ...]},
            ]},
        ],
    }
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Set, Tuple, Union

from roget.errors import HeaderCorruptionError


UNPARSED = "UNPARSED"

SECTION_ID_PATTERN = re.compile(r"^(\d+)([a-z]?)$")


class WordClass(str, Enum):
    """Grammatical category that governs a subsection's entries."""

    ADJECTIVE = "Adj"
    ADVERB = "Adv"
    INTERJECTION = "Int"
    NOUN = "N"
    PHRASE = "Phr"
    PRONOUN = "Pron"
    VERB = "V"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


class FlagTag(str, Enum):
    """Status markers attached to individual entries."""

    ARCHAIC_1991 = "archaic_1991"
    OBSOLETE_1991 = "obsolete_1991"
    OBSOLETE_1911 = "obsolete_1911"

    def __str__(self) -> str:
        return self.value


def parse_section_id(section_id: str) -> Tuple[int, str]:
    """
    Split a section id into its major number and minor letter.

    Args:
        section_id: Id as written in the header (e.g. '100a')

    Returns:
        (major, minor) tuple, minor is '' when absent

    Raises:
        HeaderCorruptionError: If the id has no leading digits, major is 0,
            or the digits carry leading zeros
    """
    match = SECTION_ID_PATTERN.match(section_id)
    if not match:
        raise HeaderCorruptionError(f"Unparsable section id {section_id!r}")
    major = int(match.group(1))
    if major <= 0:
        raise HeaderCorruptionError(f"Section id {section_id!r} has no positive major number")
    if match.group(1).startswith("0"):
        raise HeaderCorruptionError(
            f"Section id {section_id!r} has leading zeros; ids must be written as major "
            f"number plus minor letter (e.g. '{major}{match.group(2)}')"
        )
    return major, match.group(2)


@dataclass
class Entry:
    """One comma-delimited lexical item."""

    text: str
    flags: Set[FlagTag] = field(default_factory=set)

    def __post_init__(self):
        if not self.text:
            raise ValueError("Entry text must not be empty (use the UNPARSED placeholder)")

    def to_dict(self) -> Dict:
        return {
            "text": self.text,
            "flags": sorted(flag.value for flag in self.flags),
        }


@dataclass
class Group:
    """A semicolon-delimited cluster of near-synonyms."""

    entries: List[Entry]

    def __post_init__(self):
        if not self.entries:
            raise ValueError("Group must hold at least one entry")

    def to_dict(self) -> Dict:
        return {"entries": [entry.to_dict() for entry in self.entries]}


@dataclass
class RawSubsection:
    """Unsplit logical line waiting for the bloom pass."""

    text: str

    def to_dict(self) -> Dict:
        return {"text": self.text}


@dataclass
class Subsection:
    """A word-class tagged run of groups."""

    type: WordClass
    groups: List[Group] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "type": self.type.value,
            "groups": [group.to_dict() for group in self.groups],
        }


@dataclass
class Section:
    """A numbered thesaurus category, e.g. '#100a. Fraction.'"""

    id: str
    major: int
    minor: str
    name: str
    comments: List[str] = field(default_factory=list)
    subsections: List[Union[RawSubsection, Subsection]] = field(default_factory=list)

    def __post_init__(self):
        if self.major <= 0:
            raise HeaderCorruptionError(f"Section {self.id!r} has major number {self.major}")
        if self.id != f"{self.major}{self.minor}":
            raise HeaderCorruptionError(
                f"Section id {self.id!r} does not match major={self.major} minor={self.minor!r}"
            )

    @classmethod
    def from_header(cls, section_id: str, name: str, comments: List[str], remainder: str = "") -> "Section":
        """Create a section from a parsed header line, seeded with its trailing text."""
        major, minor = parse_section_id(section_id)
        return cls(
            id=section_id,
            major=major,
            minor=minor,
            name=name,
            comments=list(comments),
            subsections=[RawSubsection(remainder)],
        )

    @property
    def is_bloomed(self) -> bool:
        """True once every subsection has been expanded."""
        return all(isinstance(sub, Subsection) for sub in self.subsections)

    def to_dict(self) -> Dict:
        return {
            "major": self.major,
            "minor": self.minor,
            "name": self.name,
            "comments": list(self.comments),
            "subsections": [sub.to_dict() for sub in self.subsections],
        }


def sections_to_dict(sections: Dict[str, Section]) -> Dict[str, Dict]:
    """Plain-data view of a whole parse result, keyed by section id."""
    return {section_id: section.to_dict() for section_id, section in sections.items()}
