"""
Exception hierarchy for the Roget parser.

Content problems that the parser can degrade around (unknown word classes,
empty entries) are not errors. Only structural violations and bad
configuration raise.
"""

from typing import Optional


class RogetError(Exception):
    """Base class for all errors raised by this package."""


class ParseError(RogetError):
    """A fatal problem with the thesaurus text itself."""

    def __init__(self, message: str, lineno: Optional[int] = None, line: Optional[str] = None):
        self.lineno = lineno
        self.line = line
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class HeaderCorruptionError(ParseError):
    """A line looked like a section header but its id could not be parsed."""


class OrphanLineError(ParseError):
    """Body text appeared before the first section header."""


class ConfigError(RogetError, ValueError):
    """Configuration references unknown codes or holds an invalid value."""
