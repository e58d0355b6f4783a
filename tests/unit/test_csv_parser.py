"""
Unit tests for the CSV parser.

Run: pytest tests/unit/test_csv_parser.py -v
"""

import types

from parsers.csv_parser import parse_csv, parse_csv_line
from utils.text_utils import clean_cell, strip_enclosing_quotes


class TestParseCsvLine:
    """Tests for the field tokenizer."""

    def test_plain_fields(self):
        assert parse_csv_line("a,b,c") == ["a", "b", "c"]

    def test_quoted_field_with_comma(self):
        """Comma inside quotes is part of the value."""
        assert parse_csv_line('a,"b,c",d') == ["a", "b,c", "d"]

    def test_escaped_quote(self):
        """Doubled quote inside quotes is one literal quote."""
        assert parse_csv_line('"he said ""hi"""') == ['he said "hi"']

    def test_trailing_empty_field_emitted(self):
        assert parse_csv_line("a,b,") == ["a", "b", ""]

    def test_empty_line_is_one_empty_field(self):
        assert parse_csv_line("") == [""]

    def test_unterminated_quote_runs_to_end_of_line(self):
        assert parse_csv_line('a,"b,c') == ["a", "b,c"]

    def test_whitespace_is_kept(self):
        assert parse_csv_line(" a , b ") == [" a ", " b "]


class TestParseCsv:
    """Tests for parse_csv()."""

    def test_returns_lazy_iterator(self):
        """Records are produced on demand."""
        result = parse_csv("A,B\n1,2\n")

        assert isinstance(result, types.GeneratorType)

    def test_two_line_input_round_trips(self):
        records = list(parse_csv("Id,Name,Sku\nP1,Widget,SKU1"))

        assert records == [{"Id": "P1", "Name": "Widget", "Sku": "SKU1"}]

    def test_header_only_returns_empty(self):
        assert list(parse_csv("Id,Name\n")) == []

    def test_empty_text_returns_empty(self):
        assert list(parse_csv("")) == []

    def test_blank_lines_are_ignored(self):
        """Blank lines do not count towards the two-line minimum."""
        text = "\n   \nId,Name\n\n  \nP1,Widget\n\n"

        records = list(parse_csv(text))

        assert records == [{"Id": "P1", "Name": "Widget"}]

    def test_blank_lines_only_around_header_returns_empty(self):
        assert list(parse_csv("\n\nId,Name\n\n")) == []

    def test_header_labels_trimmed_and_unquoted(self):
        records = list(parse_csv(' "Id" , "Product Name" \nP1,Widget'))

        assert list(records[0].keys()) == ["Id", "Product Name"]

    def test_values_trimmed(self):
        records = list(parse_csv("A,B\n  x  ,  y \n"))

        assert records[0] == {"A": "x", "B": "y"}

    def test_carriage_returns_removed(self):
        """Windows line endings do not leak into values."""
        records = list(parse_csv("A,B\r\n1,2\r\n"))

        assert records == [{"A": "1", "B": "2"}]

    def test_short_row_padded_with_empty_strings(self):
        records = list(parse_csv("A,B,C\n1\n"))

        assert records[0] == {"A": "1", "B": "", "C": ""}

    def test_extra_values_ignored(self):
        records = list(parse_csv("A,B\n1,2,3,4\n"))

        assert records[0] == {"A": "1", "B": "2"}

    def test_row_of_empty_cells_skipped(self):
        records = list(parse_csv('A,B\n,\n" ",""\n1,2\n'))

        assert records == [{"A": "1", "B": "2"}]

    def test_quoted_values_with_commas_and_quotes(self):
        text = 'Id,Name\nP1,"Widget, large"\nP2,"The ""best"" gadget"\n'

        records = list(parse_csv(text))

        assert records[0]["Name"] == "Widget, large"
        assert records[1]["Name"] == 'The "best" gadget'

    def test_escaped_quote_with_trailing_space(self):
        records = list(parse_csv('Quote\n"he said ""hi""" \n'))

        assert records[0]["Quote"] == 'he said "hi"'

    def test_every_header_present_in_every_record(self):
        records = list(parse_csv("A,B,C\n1,2,3\n4\n"))

        assert all(list(r.keys()) == ["A", "B", "C"] for r in records)

    def test_order_preserved(self):
        text = "Id\n" + "\n".join(f"P{i}" for i in range(10))

        records = list(parse_csv(text))

        assert [r["Id"] for r in records] == [f"P{i}" for i in range(10)]


class TestCleanCell:
    """Tests for cell cleaning helpers."""

    def test_strips_one_pair_of_quotes(self):
        assert strip_enclosing_quotes('""x""') == '"x"'

    def test_unbalanced_quote_kept(self):
        assert strip_enclosing_quotes('"x') == '"x'

    def test_inner_quotes_kept(self):
        assert strip_enclosing_quotes('he said "hi"') == 'he said "hi"'

    def test_single_quote_character_kept(self):
        assert strip_enclosing_quotes('"') == '"'

    def test_clean_cell_trims_then_unquotes(self):
        assert clean_cell('  "ACME"  ') == "ACME"

    def test_clean_cell_none(self):
        assert clean_cell(None) == ""
