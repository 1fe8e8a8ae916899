"""Tests for the csvdoc tokenizer."""

import pytest

import csvdoc
from csvdoc import CsvParser


class TestParseString:
    """Tests for parse_string function."""

    def test_simple_csv(self):
        """Test parsing a simple CSV string."""
        data = "a,b,c\n1,2,3\n4,5,6"
        rows = csvdoc.parse_string(data)
        assert rows == [
            ["a", "b", "c"],
            ["1", "2", "3"],
            ["4", "5", "6"],
        ]

    def test_empty_string(self):
        """Test parsing an empty string."""
        assert csvdoc.parse_string("") == []

    def test_single_field(self):
        """Test parsing a single field."""
        assert csvdoc.parse_string("hello") == [["hello"]]

    def test_trailing_newline(self):
        """A final line break does not add a row."""
        assert csvdoc.parse_string("a,b\n1,2\n") == [["a", "b"], ["1", "2"]]

    def test_quoted_fields(self):
        """Test parsing quoted fields."""
        data = '"hello, world","test"\n"a","b"'
        rows = csvdoc.parse_string(data)
        assert rows == [
            ["hello, world", "test"],
            ["a", "b"],
        ]

    def test_escaped_quotes(self):
        """Test parsing fields with doubled quotes."""
        data = '"say ""hello""","test"'
        assert csvdoc.parse_string(data) == [['say "hello"', "test"]]

    def test_escape_character(self):
        """An explicit escape character makes the next character literal."""
        data = '"a\\"b",c'
        assert csvdoc.parse_string(data, escape="\\") == [['a"b', "c"]]

    def test_quote_inside_unquoted_field(self):
        """A quote that does not open a field is kept as text."""
        assert csvdoc.parse_string('ab"c,d') == [['ab"c', "d"]]

    def test_custom_delimiter(self):
        """Test parsing with a custom delimiter."""
        data = "a;b;c\n1;2;3"
        assert csvdoc.parse_string(data, delimiter=";") == [
            ["a", "b", "c"],
            ["1", "2", "3"],
        ]

    def test_tab_delimiter(self):
        """Test parsing TSV (tab-separated values)."""
        data = "a\tb\tc\n1\t2\t3"
        assert csvdoc.parse_string(data, delimiter="\t") == [
            ["a", "b", "c"],
            ["1", "2", "3"],
        ]

    def test_trim_whitespace(self):
        """Test trimming whitespace from fields."""
        data = "  a  ,  b  ,  c  "
        assert csvdoc.parse_string(data, trim=True) == [["a", "b", "c"]]

    def test_trim_around_quoted_field(self):
        """Whitespace before an opening quote is dropped when trimming."""
        data = '  "a, b"  ,c'
        assert csvdoc.parse_string(data, trim=True) == [["a, b", "c"]]

    def test_empty_lines_kept(self):
        """Blank lines become single empty fields by default."""
        data = "a,b\n\n1,2"
        assert csvdoc.parse_string(data) == [["a", "b"], [""], ["1", "2"]]

    def test_skip_empty_lines(self):
        """Test skipping empty lines."""
        data = "a,b\n\n1,2\n\n3,4"
        rows = csvdoc.parse_string(data, skip_empty_lines=True)
        assert rows == [["a", "b"], ["1", "2"], ["3", "4"]]

    def test_comment_lines(self):
        """Lines starting with the comment character are skipped."""
        data = "# generated\na,b\n#note\n1,2"
        rows = csvdoc.parse_string(data, comment="#")
        assert rows == [["a", "b"], ["1", "2"]]

    def test_unicode(self):
        """Test parsing Unicode content."""
        data = "名前,値\nこんにちは,世界\n🎉,✨"
        assert csvdoc.parse_string(data) == [
            ["名前", "値"],
            ["こんにちは", "世界"],
            ["🎉", "✨"],
        ]

    def test_byte_order_mark(self):
        """A leading BOM is not part of the first field."""
        assert csvdoc.parse_string("\ufeffa,b\n1,2") == [["a", "b"], ["1", "2"]]

    def test_crlf_line_endings(self):
        """Test parsing with Windows-style line endings."""
        data = "a,b,c\r\n1,2,3\r\n4,5,6"
        assert csvdoc.parse_string(data) == [
            ["a", "b", "c"],
            ["1", "2", "3"],
            ["4", "5", "6"],
        ]

    def test_cr_line_endings(self):
        """Test parsing with old Mac-style line endings."""
        assert csvdoc.parse_string("a,b\r1,2") == [["a", "b"], ["1", "2"]]

    def test_empty_fields(self):
        """Test parsing empty fields."""
        data = "a,,c\n,b,\n,,\n"
        assert csvdoc.parse_string(data) == [
            ["a", "", "c"],
            ["", "b", ""],
            ["", "", ""],
        ]


class TestMalformedInput:
    """Tests for unterminated quotes."""

    def test_unterminated_quote(self):
        """An unclosed quoted field fails with the line it started on."""
        with pytest.raises(csvdoc.MalformedInputError) as excinfo:
            csvdoc.parse_string('a,b\n"never closed,1\n2,3')
        assert excinfo.value.line == 2

    def test_errors_property(self):
        """The parser records the failure location."""
        parser = CsvParser()
        with pytest.raises(csvdoc.MalformedInputError):
            parser.parse_string('"x')
        assert parser.errors == [(1, "Unterminated quoted field")]

    def test_errors_reset_between_parses(self):
        """A successful parse clears earlier errors."""
        parser = CsvParser()
        with pytest.raises(csvdoc.MalformedInputError):
            parser.parse_string('"x')
        parser.parse_string("a,b")
        assert parser.errors == []


class TestRecordLines:
    """Tests for line numbers reported by iter_records."""

    def test_multiline_field_line_numbers(self):
        """Records after a multi-line field keep their real line number."""
        records = list(CsvParser().iter_records('a\n"x\ny"\nb'))
        assert records == [(1, ["a"]), (2, ["x\ny"]), (4, ["b"])]


class TestParseFile:
    """Tests for parse_file function."""

    def test_parse_simple_file(self, tmp_path):
        """Test parsing a simple CSV file."""
        csv_file = tmp_path / "test.csv"
        csv_file.write_text("a,b,c\n1,2,3\n4,5,6")

        rows = csvdoc.parse_file(str(csv_file))
        assert rows == [
            ["a", "b", "c"],
            ["1", "2", "3"],
            ["4", "5", "6"],
        ]

    def test_parse_path_object(self, tmp_path):
        """Path objects are accepted."""
        csv_file = tmp_path / "test.csv"
        csv_file.write_text("x\n1")
        assert csvdoc.parse_file(csv_file) == [["x"], ["1"]]

    def test_parse_large_file(self, tmp_path):
        """Test parsing a larger CSV file."""
        csv_file = tmp_path / "large.csv"

        lines = ["col1,col2,col3"]
        for i in range(1000):
            lines.append(f"value{i}_1,value{i}_2,value{i}_3")
        csv_file.write_text("\n".join(lines))

        rows = csvdoc.parse_file(str(csv_file))
        assert len(rows) == 1001
        assert rows[0] == ["col1", "col2", "col3"]
        assert rows[-1] == ["value999_1", "value999_2", "value999_3"]

    def test_crlf_preserved_inside_quotes(self, tmp_path):
        """Line breaks inside quoted fields survive reading from disk."""
        csv_file = tmp_path / "crlf.csv"
        csv_file.write_bytes(b'"a\r\nb",c\r\n1,2\r\n')
        assert csvdoc.parse_file(csv_file) == [["a\r\nb", "c"], ["1", "2"]]

    def test_bom_file(self, tmp_path):
        """A UTF-8 BOM at the start of a file is dropped."""
        csv_file = tmp_path / "bom.csv"
        csv_file.write_bytes(b"\xef\xbb\xbfa,b\n1,2\n")
        assert csvdoc.parse_file(csv_file)[0] == ["a", "b"]

    def test_undecodable_bytes(self, tmp_path):
        """Invalid UTF-8 is malformed input."""
        csv_file = tmp_path / "bad.csv"
        csv_file.write_bytes(b"a,b\n\xff\xfe,1\n")
        with pytest.raises(csvdoc.MalformedInputError):
            csvdoc.parse_file(csv_file)

    def test_file_not_found(self):
        """Test error handling for missing file."""
        with pytest.raises(csvdoc.CsvFileNotFoundError):
            csvdoc.parse_file("/nonexistent/path/to/file.csv")

    def test_file_not_found_is_builtin(self):
        """The missing-file error is also a FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            csvdoc.parse_file("/nonexistent/path/to/file.csv")

    def test_directory_rejected(self, tmp_path):
        """Directories are not regular files."""
        with pytest.raises(csvdoc.CsvValidationError):
            csvdoc.parse_file(tmp_path)

    def test_max_file_size(self, tmp_path):
        """Files above the size cap are rejected before reading."""
        csv_file = tmp_path / "big.csv"
        csv_file.write_text("a,b,c\n1,2,3\n")
        with pytest.raises(csvdoc.CsvValidationError):
            csvdoc.parse_file(csv_file, max_file_size=4)

    def test_custom_options(self, tmp_path):
        """Test parsing with custom options."""
        csv_file = tmp_path / "custom.csv"
        csv_file.write_text("  a  ;  b  ;  c  \n  1  ;  2  ;  3  ")

        rows = csvdoc.parse_file(str(csv_file), delimiter=";", trim=True)
        assert rows == [
            ["a", "b", "c"],
            ["1", "2", "3"],
        ]


class TestCountRows:
    """Tests for count_rows function."""

    def test_count_simple(self, tmp_path):
        """Test counting rows in a simple file."""
        csv_file = tmp_path / "count.csv"
        csv_file.write_text("a,b,c\n1,2,3\n4,5,6")
        assert csvdoc.count_rows(str(csv_file)) == 3

    def test_count_empty_file(self, tmp_path):
        """Test counting rows in an empty file."""
        csv_file = tmp_path / "empty.csv"
        csv_file.write_text("")
        assert csvdoc.count_rows(str(csv_file)) == 0

    def test_count_quoted_newlines(self, tmp_path):
        """Line breaks inside quotes do not start new records."""
        csv_file = tmp_path / "quoted.csv"
        csv_file.write_text('a,b\n"x\ny",1\n')
        assert csvdoc.count_rows(csv_file) == 2

    def test_count_missing_file(self):
        """Counting a missing file fails like parsing it."""
        with pytest.raises(csvdoc.CsvFileNotFoundError):
            csvdoc.count_rows("/nonexistent/file.csv")


class TestValidation:
    """Tests for input validation."""

    def test_invalid_delimiter_empty(self):
        """Test error for empty delimiter."""
        with pytest.raises(csvdoc.CsvValidationError):
            csvdoc.parse_string("a,b", delimiter="")

    def test_invalid_delimiter_multi_char(self):
        """Test error for multi-character delimiter."""
        with pytest.raises(csvdoc.CsvValidationError):
            csvdoc.parse_string("a,b", delimiter=",,")

    def test_invalid_delimiter_newline(self):
        """Test error for a line break delimiter."""
        with pytest.raises(csvdoc.CsvValidationError):
            csvdoc.parse_string("a,b", delimiter="\n")

    def test_invalid_quote_empty(self):
        """Test error for empty quote character."""
        with pytest.raises(csvdoc.CsvValidationError):
            csvdoc.parse_string("a,b", quote="")

    def test_invalid_quote_multi_char(self):
        """Test error for multi-character quote."""
        with pytest.raises(csvdoc.CsvValidationError):
            csvdoc.parse_string("a,b", quote='""')

    def test_delimiter_equals_quote(self):
        """Test error when delimiter and quote collide."""
        with pytest.raises(csvdoc.CsvValidationError):
            CsvParser(delimiter='"')

    def test_invalid_comment(self):
        """Test error for multi-character comment prefix."""
        with pytest.raises(csvdoc.CsvValidationError):
            CsvParser(comment="//")

    @pytest.mark.parametrize("comment", [",", '"'])
    def test_comment_clashes(self, comment):
        """Test error when the comment character is the delimiter or quote."""
        with pytest.raises(csvdoc.CsvValidationError):
            CsvParser(comment=comment)

    def test_validation_error_is_value_error(self):
        """Validation errors are ValueErrors."""
        with pytest.raises(ValueError):
            CsvParser(delimiter="")
