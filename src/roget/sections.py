"""
Section scanner - phase one of the Roget parse.

Reads the physical lines of a Gutenberg Roget file, rebuilds logical lines
and groups them into numbered sections. Section bodies are left as
RawSubsection records; the bloom pass (roget.bloom) splits them later.

Source conventions handled here:

    # ...                  full-line comment
    <-- ... -->            long comment, may span many lines
    %                      toggles a block of alternate header text
         #1. Existence. -- N. existence, being, ...
    subsistence.           continuation (not indented) is joined on
         reality, ...      indented line starts a new paragraph

Architecture:
    lines -> LineReader -> iter_logical_lines() -> SectionScanner.step()
                 (one-line push-back)                (folds into ScanState)
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from roget.config import RogetConfig, load_config
from roget.errors import HeaderCorruptionError, OrphanLineError
from roget.model import RawSubsection, Section

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"
LONG_COMMENT_OPEN = "<--"
LONG_COMMENT_CLOSE = "-->"
ALTERNATE_HEADER_MARKER = "%"

# Lines starting with one of these never continue the previous line
MARKER_PREFIXES = (COMMENT_PREFIX, ALTERNATE_HEADER_MARKER, LONG_COMMENT_OPEN)

PARAGRAPH_INDENT = re.compile(r"^\s{4}")

# "..., word.    Adj. ..." - two paragraphs glued together by the join rule
GLUED_PARAGRAPHS = re.compile(r"[^,]+,[^.]+\.\s{4}")
GLUE_WIDTH = 4

HEADER_PATTERN = re.compile(r"^#?(\d+[a-z]?)\. (.*?)(?:--(.*))?$")

# [leading aside] Title proper. [trailing aside]
TITLE_PATTERN = re.compile(r"(?:\[(.+?)\.?\])?\s*([^.]+)\.?\s*(?:\[(.+?)\.?\])?")

WHITESPACE_RUN = re.compile(r"\s{2,}")


# =============================================================================
# Line records
# =============================================================================


@dataclass
class PhysicalLine:
    """One line as read from the source, newline removed."""

    text: str
    lineno: int
    split_remainder: bool = False  # tail cut off a glued logical line


@dataclass
class LogicalLine:
    """A reconstructed line, leading whitespace stripped."""

    text: str
    lineno: int
    indented: bool = False

    @property
    def may_be_header(self) -> bool:
        """Headers carry '#' or start in column zero; indented text is body."""
        return self.text.startswith(COMMENT_PREFIX) or not self.indented


@dataclass
class Header:
    """Fields of a recognised section header line."""

    section_id: str
    name: str
    comments: List[str]
    remainder: str


class LineReader:
    """
    Physical line source with a one-line push-back buffer.

    Usage:
        with open(path, encoding="utf-8") as f:
            reader = LineReader(f)
            line = reader.next()       # None at end of input
            reader.push_back(line)     # next() returns it again
    """

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self._pushed: Optional[PhysicalLine] = None
        self.lineno = 0

    def next(self) -> Optional[PhysicalLine]:
        if self._pushed is not None:
            line, self._pushed = self._pushed, None
            return line
        raw = next(self._lines, None)
        if raw is None:
            return None
        self.lineno += 1
        return PhysicalLine(raw.rstrip("\r\n"), self.lineno)

    def push_back(self, line: PhysicalLine) -> None:
        if self._pushed is not None:
            raise RuntimeError("LineReader holds only one pushed-back line")
        self._pushed = line


# =============================================================================
# Logical line reconstruction
# =============================================================================


def is_blank(text: str) -> bool:
    return not text.strip()


def continues_logical_line(text: str) -> bool:
    """True if a non-blank physical line should be joined onto the current one."""
    return not PARAGRAPH_INDENT.match(text) and not text.startswith(MARKER_PREFIXES)


def split_glued(text: str) -> Optional[Tuple[str, str]]:
    """
    Split two paragraphs that the join rule glued together.

    Returns:
        (head, tail) split at the four-space gap after the first
        "..., ...." run, or None if the text does not look glued
    """
    match = GLUED_PARAGRAPHS.search(text)
    if not match:
        return None
    return text[: match.end() - GLUE_WIDTH], text[match.end():]


def merge_continuations(reader: LineReader, text: str) -> str:
    """
    Join following physical lines onto text until one starts a new paragraph.

    Empty lines between continuations are dropped; a whitespace-only line
    is treated like any other physical line. The line that ends the
    merge (or the tail of a glued split) is left in the reader's buffer.
    """
    while True:
        candidate = reader.next()
        if candidate is None:
            return text
        if candidate.text == "":
            continue
        if not continues_logical_line(candidate.text):
            reader.push_back(candidate)
            return text

        text = f"{text} {candidate.text}"

        glued = split_glued(text)
        if glued is None:
            continue
        head, tail = glued
        if is_blank(tail):
            # Nothing after the gap; keep joining from the head
            text = head
            continue
        reader.push_back(PhysicalLine(tail, candidate.lineno, split_remainder=True))
        return head


def iter_logical_lines(lines: Iterable[str]) -> Iterator[LogicalLine]:
    """
    Yield logical lines, skipping comments and alternate header blocks.

    Args:
        lines: Physical lines (an open file, a list of strings, ...)
    """
    reader = LineReader(lines)
    in_long_comment = False
    in_alternate_header = False

    while True:
        line = reader.next()
        if line is None:
            break
        text = line.text

        if is_blank(text) or text.startswith(COMMENT_PREFIX):
            continue

        if text.startswith(LONG_COMMENT_OPEN):
            in_long_comment = True
        if text.endswith(LONG_COMMENT_CLOSE):
            in_long_comment = False
            continue
        if in_long_comment:
            continue

        if text.startswith(ALTERNATE_HEADER_MARKER):
            in_alternate_header = not in_alternate_header
            continue
        if in_alternate_header:
            continue

        indented = line.split_remainder or text[:1].isspace()
        logical = merge_continuations(reader, text.lstrip())
        yield LogicalLine(logical, line.lineno, indented)

    # Unterminated blocks simply run to end of file
    if in_long_comment or in_alternate_header:
        logger.debug("Input ended inside a comment or alternate header block")


# =============================================================================
# Header parsing
# =============================================================================


def parse_title(title: str) -> Tuple[str, List[str]]:
    """
    Split a header title into its name and bracketed asides.

    '[Note] Title  Proper. [End]' -> ('TitleProper', ['Note', 'End'])

    Runs of two or more whitespace characters are removed outright.
    """
    match = TITLE_PATTERN.search(title)
    if not match:
        return "", []
    leading, name, trailing = match.groups()
    comments = [c for c in (leading, trailing) if c is not None]
    name = WHITESPACE_RUN.sub("", name or "").strip()
    return name, comments


def parse_header(line: LogicalLine) -> Optional[Header]:
    """Recognise a section header line, or return None for body text."""
    if not line.may_be_header:
        return None
    match = HEADER_PATTERN.match(line.text)
    if not match:
        return None
    section_id, title, remainder = match.groups()
    name, comments = parse_title(title)
    return Header(section_id, name, comments, remainder or "")


# =============================================================================
# Scanner
# =============================================================================


@dataclass
class ScanState:
    """Accumulator threaded through SectionScanner.step()."""

    sections: Dict[str, Section] = field(default_factory=dict)
    current_id: Optional[str] = None
    body_lines: int = 0
    orphan_lines: int = 0
    duplicate_ids: List[str] = field(default_factory=list)


class SectionScanner:
    """
    Group logical lines into sections.

    Usage:
        scanner = SectionScanner()
        with open("roget15a.txt", encoding="utf-8") as f:
            sections = scanner.scan(f)
        sections["1"].name  # 'Existence'
    """

    def __init__(self, config: Optional[RogetConfig] = None):
        self.config = config if config is not None else load_config()

    def scan(self, lines: Iterable[str]) -> Dict[str, Section]:
        """
        Scan physical lines into a section mapping.

        Raises:
            HeaderCorruptionError: If a header's id cannot be parsed
            OrphanLineError: If body text precedes the first header and
                scanner.orphan_lines is 'error'
        """
        state = ScanState()
        for line in iter_logical_lines(lines):
            state = self.step(state, line)

        logger.info(
            f"Scanned {len(state.sections):,} sections "
            f"({state.body_lines:,} body lines)"
        )
        if state.duplicate_ids:
            logger.warning(f"  {len(state.duplicate_ids)} duplicate section ids replaced")
        if state.orphan_lines:
            logger.warning(f"  {state.orphan_lines} lines before the first header skipped")
        return state.sections

    def step(self, state: ScanState, line: LogicalLine) -> ScanState:
        """Apply one logical line to the scan state."""
        header = parse_header(line)
        if header is not None:
            return self._open_section(state, header, line)

        if state.current_id is None:
            return self._orphan(state, line)

        state.sections[state.current_id].subsections.append(RawSubsection(line.text))
        state.body_lines += 1
        return state

    def _open_section(self, state: ScanState, header: Header, line: LogicalLine) -> ScanState:
        try:
            section = Section.from_header(
                header.section_id, header.name, header.comments, header.remainder
            )
        except HeaderCorruptionError as e:
            raise HeaderCorruptionError(str(e), lineno=line.lineno, line=line.text) from e

        if section.id in state.sections:
            logger.warning(f"Line {line.lineno}: section {section.id} redefined, keeping the later one")
            state.duplicate_ids.append(section.id)

        state.sections[section.id] = section
        state.current_id = section.id
        logger.debug(f"Line {line.lineno}: section {section.id} '{section.name}'")
        return state

    def _orphan(self, state: ScanState, line: LogicalLine) -> ScanState:
        if self.config.scanner.orphan_lines == "error":
            raise OrphanLineError("text before the first section header", lineno=line.lineno, line=line.text)
        logger.warning(f"Line {line.lineno}: skipping text before the first section header")
        state.orphan_lines += 1
        return state


def scan_sections(lines: Iterable[str], config: Optional[RogetConfig] = None) -> Dict[str, Section]:
    """Functional form of SectionScanner(config).scan(lines)."""
    return SectionScanner(config).scan(lines)
