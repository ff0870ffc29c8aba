"""
parser.py - Parse Project Gutenberg's Roget's Thesaurus.

Usage:
    from roget.parser import parse_roget

    sections = parse_roget("data/raw/roget15a.txt")
    sections["1"].subsections[0].groups[0].entries[0].text  # 'existence'

parse_roget() runs both phases: the section scanner (roget.sections) reads
the whole file, then the bloomer (roget.bloom) expands every section. The
result is only usable once both have finished.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from roget.bloom import bloom_sections
from roget.config import RogetConfig, load_config
from roget.model import Section
from roget.sections import SectionScanner
from roget.stats import collect_stats

logger = logging.getLogger(__name__)


def parse_sections(path: Union[str, Path], config: Optional[RogetConfig] = None) -> Dict[str, Section]:
    """
    Read the named file and parse it to the section level only.

    Section bodies are left as RawSubsection records.

    Raises:
        OSError: If the file cannot be opened or read
        ParseError: If the file breaks a structural rule
    """
    if config is None:
        config = load_config()
    path = Path(path)

    logger.info(f"Reading thesaurus from {path}")
    try:
        f = open(path, "r", encoding=config.scanner.encoding, errors=config.scanner.errors)
    except OSError as e:
        logger.error(f"Couldn't open {path}: {e.strerror or e}")
        raise

    with f:
        return SectionScanner(config).scan(f)


def parse_roget(path: Union[str, Path], config: Optional[RogetConfig] = None) -> Dict[str, Section]:
    """
    Open, read and fully parse a Gutenberg Roget file.

    Returns:
        Mapping of section id ('1', '100a', ...) to bloomed Section records,
        in file order

    Raises:
        OSError: If the file cannot be opened or read
        ParseError: If the file breaks a structural rule
    """
    if config is None:
        config = load_config()
    sections = parse_sections(path, config)
    bloom_sections(sections, config)

    if logger.isEnabledFor(logging.INFO):
        stats = collect_stats(sections, unparsed=config.unparsed)
        logger.info(f"Parsed {path}\n{stats.summary()}")
    return sections
