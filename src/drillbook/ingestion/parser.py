"""Tolerant CSV parsing for problem listings.

The parser accepts the loosely formatted exports found in community problem
lists: ``//`` comment lines, blank lines, ragged rows, and quoted fields that
carry commas, doubled quotes, or line breaks. It never raises on malformed
input; an unterminated quote simply absorbs the remainder of the document into
the current field.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

from drillbook.dataset.fields import Record

LOGGER = logging.getLogger(__name__)

COMMENT_PREFIX = "//"


def _is_skippable(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIX)


class CsvParser:
    """Split CSV text into header-keyed records."""

    def parse(self, text: str) -> List[Record]:
        """Return the records found in ``text``.

        Args:
            text: Raw CSV document.

        Returns:
            List[Record]: One mapping per data row, keyed by trimmed header names.
            Trailing fields missing from short rows are absent; extra fields are
            dropped.
        """
        rows = self.iter_rows(text)
        header = next(rows, None)
        if header is None:
            return []
        names = [name.strip() for name in header]

        records: List[Record] = []
        for values in rows:
            records.append(
                {name: value.strip() for name, value in zip(names, values)}
            )
        return records

    def iter_rows(self, text: str) -> Iterator[List[str]]:
        """Yield raw field lists for every non-blank, non-comment record.

        Args:
            text: Raw CSV document.

        Yields:
            List[str]: Untrimmed field values of one record.
        """
        position = 0
        length = len(text)
        while position < length:
            line_end = text.find("\n", position)
            if line_end == -1:
                line_end = length
            if _is_skippable(text[position:line_end]):
                position = line_end + 1
                continue
            fields, position = self._read_record(text, position)
            yield fields

    def _read_record(self, text: str, start: int) -> tuple[List[str], int]:
        """Read one record beginning at ``start``; return fields and next offset."""
        fields: List[str] = []
        current: List[str] = []
        in_quotes = False
        index = start
        length = len(text)

        while index < length:
            char = text[index]
            if char == '"':
                if in_quotes and index + 1 < length and text[index + 1] == '"':
                    current.append('"')
                    index += 2
                    continue
                in_quotes = not in_quotes
            elif in_quotes:
                current.append(char)
            elif char == ",":
                fields.append("".join(current))
                current = []
            elif char == "\n":
                fields.append("".join(current))
                return fields, index + 1
            elif char == "\r" and index + 1 < length and text[index + 1] == "\n":
                pass
            else:
                current.append(char)
            index += 1

        if in_quotes:
            LOGGER.debug("Unterminated quoted field starting near offset %d", start)
        fields.append("".join(current))
        return fields, length


def parse_csv(text: str) -> List[Record]:
    """Parse ``text`` with a default :class:`CsvParser`."""
    return CsvParser().parse(text)


__all__ = ["COMMENT_PREFIX", "CsvParser", "parse_csv"]
