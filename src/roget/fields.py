"""
Quote-aware field splitting for thesaurus paragraphs.

Subsection text is split twice: on ";" into groups and on "," into entries.
Phrases in the source are sometimes quoted and may contain the delimiter,
so a plain str.split() is not enough.

Grammar:
    line            ::= field (DELIM field)*
    field           ::= (quoted | bare_char)*
    quoted          ::= '"' (quoted_char | '""')* '"'?

Terminal sets:
    bare_char       ::= [^DELIM"]
    quoted_char     ::= [^"]

Rules:
    - A delimiter inside a quoted region does not split.
    - '""' inside a quoted region is one literal '"'.
    - Quote characters are dropped from the output (keep_quotes=True leaves
      quoted regions untouched for a second split).
    - Unquoted whitespace at either end of a field is trimmed; whitespace
      inside quotes is kept.
    - An unterminated quote runs to the end of the input.
    - No field is ever treated as a comment.

The number of fields is always one more than the number of unquoted
delimiters, so split_fields("", ",") == [""].
"""

from typing import List

QUOTE = '"'


class FieldSplitter:
    """
    Single-pass tokenizer over one line of text.

    Usage:
        splitter = FieldSplitter('a, "b, c", d', ",")
        splitter.split()  # ['a', 'b, c', 'd']
    """

    def __init__(self, text: str, delimiter: str, quote: str = QUOTE, keep_quotes: bool = False):
        """
        Args:
            text: Line to split
            delimiter: Single separator character
            quote: Quote character that protects delimiters
            keep_quotes: Return quoted regions verbatim (quotes and doubled
                quotes intact) so the field can be split again on a
                different delimiter
        """
        if len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
        if delimiter == quote:
            raise ValueError("Delimiter and quote character must differ")
        self.text = text
        self.delimiter = delimiter
        self.quote = quote
        self.keep_quotes = keep_quotes
        self.pos = 0
        self.length = len(text)

    # =========================================================================
    # Core parsing primitives
    # =========================================================================

    def peek(self) -> str:
        """Look at the current character without consuming it."""
        return self.text[self.pos : self.pos + 1]

    def consume(self) -> str:
        """Consume and return the current character."""
        ch = self.text[self.pos : self.pos + 1]
        self.pos += 1
        return ch

    def at_end(self) -> bool:
        return self.pos >= self.length

    def consume_if(self, expected: str) -> bool:
        """Consume expected character if it is next, return True if consumed."""
        if not self.at_end() and self.peek() == expected:
            self.pos += 1
            return True
        return False

    # =========================================================================
    # Grammar productions
    # =========================================================================

    def split(self) -> List[str]:
        """
        Split the whole input.

        line ::= field (DELIM field)*
        """
        fields = [self.parse_field()]
        while self.consume_if(self.delimiter):
            fields.append(self.parse_field())
        return fields

    def parse_field(self) -> str:
        """
        Parse one field, stopping before the next unquoted delimiter.

        field ::= (quoted | bare_char)*
        """
        chars: List[str] = []
        protected: List[bool] = []  # True for characters that came from quotes

        while not self.at_end() and self.peek() != self.delimiter:
            if self.peek() == self.quote:
                quoted = self.parse_quoted()
                chars.extend(quoted)
                protected.extend([True] * len(quoted))
            else:
                chars.append(self.consume())
                protected.append(False)

        # Trim unquoted whitespace at both ends
        start, end = 0, len(chars)
        while start < end and not protected[start] and chars[start].isspace():
            start += 1
        while end > start and not protected[end - 1] and chars[end - 1].isspace():
            end -= 1
        return "".join(chars[start:end])

    def parse_quoted(self) -> str:
        """
        Parse a quoted region and return its unescaped content.

        quoted ::= '"' (quoted_char | '""')* '"'?
        """
        start = self.pos
        self.consume()  # opening quote
        content: List[str] = []
        while not self.at_end():
            ch = self.consume()
            if ch == self.quote:
                if self.consume_if(self.quote):
                    content.append(self.quote)
                    continue
                break
            content.append(ch)
        if self.keep_quotes:
            return self.text[start : self.pos]
        return "".join(content)


def split_fields(text: str, delimiter: str, keep_quotes: bool = False) -> List[str]:
    """Split text on delimiter, treating double-quoted regions as opaque."""
    return FieldSplitter(text, delimiter, keep_quotes=keep_quotes).split()
