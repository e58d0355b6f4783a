"""
CSV parser for catalog exports.

Turns raw CSV text into a lazy sequence of records, each record a dict
mapping header label to cleaned string value. Knows nothing about any
particular dataset's schema.

Handles:
- Quoted fields with embedded commas: a,"b,c",d → ["a", "b,c", "d"]
- Escaped quotes: a doubled quote inside a quoted field is one literal quote
- Blank lines anywhere in the file
- Rows shorter or longer than the header
"""

from typing import Iterator

import structlog

from utils.text_utils import clean_cell

logger = structlog.get_logger(__name__)

QUOTE = '"'
DELIMITER = ","

# Header + at least one data row
MIN_LINES = 2


def parse_csv_line(line: str) -> list[str]:
    """
    Split a single CSV line into raw cell values.

    Scans character by character keeping track of whether we are inside
    quotes. A doubled quote inside quotes is one literal quote. Commas
    inside quotes are literal. The last field is always emitted, even if
    empty.

    Args:
        line: One line of CSV text (no line feed)

    Returns:
        List of raw cell values (not trimmed)
    """
    values: list[str] = []
    current: list[str] = []
    in_quotes = False

    i = 0
    length = len(line)
    while i < length:
        char = line[i]

        if char == QUOTE:
            if in_quotes and i + 1 < length and line[i + 1] == QUOTE:
                # Escaped quote
                current.append(QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            values.append("".join(current))
            current = []
        else:
            current.append(char)

        i += 1

    values.append("".join(current))
    return values


def parse_csv(text: str) -> Iterator[dict[str, str]]:
    """
    Parse CSV text into records keyed by header label.

    The first non-blank line is the header. Returns nothing when there are
    fewer than two non-blank lines. Values beyond the header length are
    ignored, missing values become "". Rows that are empty after cleaning
    are skipped.

    Args:
        text: Full CSV text

    Yields:
        dict mapping header label to cleaned value, in file order
    """
    lines = [line for line in text.split("\n") if line.strip()]

    if len(lines) < MIN_LINES:
        logger.debug("csv_too_short", line_count=len(lines))
        return

    headers = [clean_cell(label) for label in parse_csv_line(lines[0])]

    for line in lines[1:]:
        values = [clean_cell(value) for value in parse_csv_line(line)]

        if not any(values):
            continue

        yield {
            header: values[index] if index < len(values) else ""
            for index, header in enumerate(headers)
        }
