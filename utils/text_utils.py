"""
Text utilities for cleaning values from exported CSV files.

Used by the CSV parser and the dataset extractors.
"""

from typing import Optional


def strip_enclosing_quotes(value: str) -> str:
    """
    Remove at most one pair of enclosing double quotes.

    Only a matching pair is removed:
    - '"ACME"' → 'ACME'
    - '""ACME""' → '"ACME"'
    - 'he said "hi"' → unchanged
    - '"ACME' → unchanged

    Args:
        value: Raw string

    Returns:
        String without one pair of enclosing quotes
    """
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def clean_cell(value: Optional[str]) -> str:
    """
    Clean a single CSV cell.

    - Strips surrounding whitespace (including a trailing carriage return)
    - Strips one layer of enclosing double quotes
    - Returns "" for None

    Args:
        value: Raw cell text from the tokenizer

    Returns:
        Cleaned string, never None
    """
    if value is None:
        return ""

    return strip_enclosing_quotes(value.strip())


def normalize_header(label: str) -> str:
    """Lowercase and trim a header label for comparison."""
    return label.strip().lower()
