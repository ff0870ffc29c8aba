"""
Subsection bloomer - phase two of the Roget parse.

Expands every RawSubsection produced by the scanner into a typed Subsection:

    "1. N. being, existing|; substantiality."
        -> Subsection(type=N, groups=[
               Group([Entry('being'), Entry('existing', {obsolete_1911})]),
               Group([Entry('substantiality')]),
           ])

Nothing in here raises on odd input. Missing word-class tags fall back to
the previous subsection's type (or Unknown), and empty fields become
UNPARSED entries so group and entry counts always match the source.
"""

import logging
import re
from typing import Dict, Optional, Tuple

from roget.config import RogetConfig, load_config
from roget.fields import split_fields
from roget.model import Entry, Group, RawSubsection, Section, Subsection, WordClass

logger = logging.getLogger(__name__)

GROUP_DELIMITER = ";"
ENTRY_DELIMITER = ","

SPACE_RUN = re.compile(r" {2,}")
PARAGRAPH_NUMBER = re.compile(r"^\d+\.\s+")


def clean_subsection_text(text: str) -> str:
    """
    Normalise a raw paragraph: collapse space runs, trim, drop one final period.

    '  existing,  being.  ' -> 'existing, being'
    """
    text = SPACE_RUN.sub(" ", text).strip()
    if text.endswith("."):
        text = text[:-1].rstrip()
    return text


class SubsectionBloomer:
    """
    Split raw section bodies into subsections, groups and entries.

    Usage:
        bloomer = SubsectionBloomer()
        bloomer.bloom(sections)   # mutates sections in place
    """

    def __init__(self, config: Optional[RogetConfig] = None):
        self.config = config if config is not None else load_config()

    def bloom(self, sections: Dict[str, Section]) -> None:
        """Expand every section's subsections in place."""
        subsection_count = 0
        for section in sections.values():
            self.bloom_section(section)
            subsection_count += len(section.subsections)
        logger.info(f"Bloomed {subsection_count:,} subsections across {len(sections):,} sections")

    def bloom_section(self, section: Section) -> None:
        """Replace section.subsections with bloomed records, keeping order."""
        previous: Optional[WordClass] = None
        bloomed = []
        for subsection in section.subsections:
            if isinstance(subsection, RawSubsection):
                subsection = self.bloom_subsection(subsection.text, previous)
                if subsection.type is WordClass.UNKNOWN:
                    logger.debug(f"Section {section.id}: subsection without word class")
            bloomed.append(subsection)
            previous = subsection.type
        section.subsections[:] = bloomed

    def detect_word_class(self, text: str, previous: Optional[WordClass]) -> Tuple[WordClass, str]:
        """
        Read the word-class tag that opens a paragraph.

        Returns:
            (word_class, remaining_text). Untagged text inherits previous,
            or gets Unknown when there is no previous subsection.
        """
        text = PARAGRAPH_NUMBER.sub("", text, count=1)
        match = self.config.word_class_pattern.match(text)
        if match:
            return WordClass(match.group(1)), text[match.end():]
        if previous is not None:
            return previous, text
        return WordClass.UNKNOWN, text

    def bloom_subsection(self, text: str, previous: Optional[WordClass] = None) -> Subsection:
        """Turn one raw paragraph into a Subsection."""
        text = clean_subsection_text(text)
        word_class, text = self.detect_word_class(text, previous)
        groups = [
            self.bloom_group(group_text)
            for group_text in split_fields(text, GROUP_DELIMITER, keep_quotes=True)
        ]
        return Subsection(type=word_class, groups=groups)

    def bloom_group(self, text: str) -> Group:
        return Group([self.make_entry(field) for field in split_fields(text, ENTRY_DELIMITER)])

    def make_entry(self, field: str) -> Entry:
        """
        Build an entry from one split field, extracting flag markers.

        Markers are literal substrings applied in configured order; every
        occurrence is removed.
        """
        if not field:
            return Entry(self.config.unparsed)

        flags = set()
        text = field
        for marker, flag in self.config.flag_markers:
            if marker in text:
                text = text.replace(marker, "")
                flags.add(flag)
        text = text.strip()

        if not text:
            logger.debug(f"Entry {field!r} is empty once markers are removed")
            text = self.config.unparsed
        return Entry(text, flags)


def bloom_sections(sections: Dict[str, Section], config: Optional[RogetConfig] = None) -> None:
    """Functional form of SubsectionBloomer(config).bloom(sections)."""
    SubsectionBloomer(config).bloom(sections)

