"""
Tests for the codec module.

Tests value codecs, TGF parsing with error positions, and serialization.
"""

import pytest
from tgfgraph.codec import (
    FLOAT_CODEC,
    INT_CODEC,
    NODE_ID_CODEC,
    STRING_CODEC,
    FunctionCodec,
    TGFParseError,
    TGFParser,
    available_codecs,
    codec_for,
    dumps,
    loads,
    parse,
    parse_pairs,
    parse_value,
    serialize,
)
from tgfgraph.graph import Graph
from tgfgraph.models import MAX_NODE_ID, Edge
from tests.fixtures import (
    BAD_INTEGER_GRAPH,
    INTEGER_GRAPH,
    MISSING_DELIMITER,
    MONTH_EDGES,
    MONTH_NODES,
    MONTHS_GRAPH,
    SIMPLE_GRAPH,
    WINDOWS_LINE_ENDINGS,
    months_graph,
)


class TestValueCodecs:
    """Tests for the built-in value codecs."""

    def test_parse_value_string(self):
        """Test that strings are taken verbatim."""
        assert parse_value("Test string") == "Test string"

    def test_parse_value_int_valid(self):
        """Test signed integers."""
        assert parse_value("-123456", INT_CODEC) == -123456
        assert parse_value("+7", INT_CODEC) == 7

    def test_parse_value_int_invalid(self):
        """Test that non-numeric text is rejected with its fragment."""
        with pytest.raises(TGFParseError) as exc_info:
            parse_value("banana", INT_CODEC)

        assert exc_info.value.fragment == "banana"

    def test_parse_value_error_has_no_position(self):
        """Test that a standalone value error does not invent a location."""
        with pytest.raises(TGFParseError) as exc_info:
            parse_value("banana", INT_CODEC)

        error = exc_info.value
        assert error.line is None
        assert error.column is None
        assert str(error).startswith("Parse error: invalid int value")
        assert "line" not in str(error)

    @pytest.mark.parametrize("text", ["", " 1", "1 ", "1_000", "0x10", "1.5"])
    def test_int_codec_is_strict(self, text):
        """Test that lenient int() spellings are refused."""
        with pytest.raises(ValueError):
            INT_CODEC.parse(text)

    def test_float_codec(self):
        """Test float parsing and rendering."""
        assert FLOAT_CODEC.parse("3.5") == 3.5
        assert FLOAT_CODEC.parse("1e-3") == 0.001
        assert FLOAT_CODEC.render(0.1) == "0.1"

        with pytest.raises(ValueError):
            FLOAT_CODEC.parse("three")

    def test_node_id_codec(self):
        """Test node id bounds."""
        assert NODE_ID_CODEC.parse(str(MAX_NODE_ID)) == MAX_NODE_ID

        with pytest.raises(ValueError):
            NODE_ID_CODEC.parse(str(MAX_NODE_ID + 1))
        with pytest.raises(ValueError):
            NODE_ID_CODEC.parse("-1")

    def test_codec_lookup(self):
        """Test finding codecs by name."""
        assert codec_for("str") is STRING_CODEC
        assert codec_for("int") is INT_CODEC
        assert available_codecs() == ["str", "int", "float"]

        with pytest.raises(KeyError):
            codec_for("bytes")


class TestParsePairs:
    """Tests for record-level parsing."""

    def test_parse_pairs_empty(self):
        """Test that empty input means no records."""
        assert parse_pairs("", NODE_ID_CODEC) == []

    def test_parse_pairs_one(self):
        """Test a single record without a trailing newline."""
        assert parse_pairs("1 2", NODE_ID_CODEC) == [(1, 2)]

    def test_parse_pairs_three(self):
        """Test several records in input order."""
        assert parse_pairs("1 2\n3 2\n4 3", NODE_ID_CODEC) == [(1, 2), (3, 2), (4, 3)]

    def test_parse_pairs_invalid(self):
        """Test that a bad value reports its line, column and fragment."""
        with pytest.raises(TGFParseError) as exc_info:
            parse_pairs("1 2\n3 banana\n4 3", NODE_ID_CODEC)

        error = exc_info.value
        assert error.fragment == "banana"
        assert error.line == 2
        assert error.column == 3

    def test_value_runs_to_end_of_line(self):
        """Test that values may contain spaces."""
        assert parse_pairs("1 First node\n2 a  b  c") == [(1, "First node"), (2, "a  b  c")]

    def test_tab_separator(self):
        """Test that tabs separate id and value too."""
        assert parse_pairs("1\tJanuary") == [(1, "January")]

    def test_empty_string_value(self):
        """Test that the string codec accepts an empty value."""
        assert parse_pairs("1 ") == [(1, "")]

    def test_missing_separator(self):
        """Test that an id with nothing after it is rejected."""
        with pytest.raises(TGFParseError) as exc_info:
            parse_pairs("12")

        assert exc_info.value.column == 3

    def test_non_numeric_id(self):
        """Test that the id must be digits."""
        with pytest.raises(TGFParseError) as exc_info:
            parse_pairs("one January")

        assert exc_info.value.reason == "expected a node id"
        assert exc_info.value.fragment == "one"

    def test_id_overflow(self):
        """Test that ids beyond 64 bits are rejected."""
        with pytest.raises(TGFParseError):
            parse_pairs(f"{MAX_NODE_ID + 1} x")


class TestParseGraph:
    """Tests for parsing whole TGF documents."""

    def test_parse_graph_simple(self):
        """Test the two node example."""
        graph = parse(SIMPLE_GRAPH)

        assert graph.items() == [(1, "First node"), (2, "Second node")]
        assert graph.edges() == [Edge(1, 2)]

    def test_parse_graph_complex(self):
        """Test the months example."""
        graph = parse(MONTHS_GRAPH)

        assert dict(graph.items()) == dict(MONTH_NODES)
        assert set(graph.edges()) == {Edge(s, t) for s, t in MONTH_EDGES}

    def test_parse_then_delete(self):
        """Test deleting the hub node of a parsed graph."""
        graph = parse(MONTHS_GRAPH)

        graph.delete_node(7)

        assert graph.node_count == 6
        assert graph.edge_count == 7

    def test_parse_integer_values(self):
        """Test parsing with an integer value codec."""
        graph = parse(INTEGER_GRAPH, INT_CODEC)

        assert graph.items() == [(1, -10), (2, 20), (3, 30)]
        assert graph.edge_count == 3

    def test_bad_value_fails_whole_parse(self):
        """Test that a rejected value aborts with the offending fragment."""
        with pytest.raises(TGFParseError) as exc_info:
            parse(BAD_INTEGER_GRAPH, INT_CODEC)

        error = exc_info.value
        assert error.line == 2
        assert error.fragment == "banana"
        assert "line 2" in str(error)

    def test_parse_error_is_value_error(self):
        """Test that callers can catch parse failures as ValueError."""
        with pytest.raises(ValueError):
            parse(BAD_INTEGER_GRAPH, INT_CODEC)

    def test_missing_delimiter(self):
        """Test that a document without "#" is rejected."""
        with pytest.raises(TGFParseError) as exc_info:
            parse(MISSING_DELIMITER)

        assert "delimiter" in exc_info.value.reason

    def test_missing_delimiter_reports_bad_node_line_first(self):
        """Test that a malformed node line beats the missing delimiter."""
        with pytest.raises(TGFParseError) as exc_info:
            parse("1 10\nx 20\n", INT_CODEC)

        assert exc_info.value.line == 2
        assert exc_info.value.reason == "expected a node id"

    def test_empty_input_is_invalid(self):
        """Test that an empty string has no delimiter."""
        with pytest.raises(TGFParseError):
            parse("")

    def test_empty_graph(self):
        """Test that a lone delimiter is an empty graph."""
        graph = parse("#\n")

        assert graph.node_count == 0
        assert graph.edge_count == 0

    def test_empty_edge_section(self):
        """Test nodes without edges."""
        graph = parse("1 a\n2 b\n#")

        assert graph.node_count == 2
        assert graph.edge_count == 0

    def test_windows_line_endings(self):
        """Test that CRLF input parses like LF input."""
        assert parse(WINDOWS_LINE_ENDINGS) == parse(SIMPLE_GRAPH)

    def test_trailing_blank_lines_ignored(self):
        """Test that blank lines at the end are not records."""
        assert parse(SIMPLE_GRAPH + "\n\n") == parse(SIMPLE_GRAPH)

    def test_blank_line_inside_section(self):
        """Test that a blank line between records is an error."""
        with pytest.raises(TGFParseError) as exc_info:
            parse("1 a\n\n2 b\n#\n")

        assert exc_info.value.line == 2

    def test_edge_with_extra_field(self):
        """Test that an edge line must have exactly two ids."""
        with pytest.raises(TGFParseError) as exc_info:
            parse("1 a\n2 b\n#\n1 2 3\n")

        assert exc_info.value.line == 4
        assert exc_info.value.fragment == "2 3"

    def test_edge_with_non_numeric_target(self):
        """Test that edge targets must be ids."""
        with pytest.raises(TGFParseError):
            parse("1 a\n2 b\n#\n1 b\n")

    def test_hash_value_is_not_delimiter(self):
        """Test that a node whose value is "#" stays a node."""
        graph = parse("1 #\n#\n")

        assert graph.items() == [(1, "#")]

    def test_duplicate_node_keeps_first(self):
        """Test first-write-wins during parsing."""
        graph = parse("1 first\n1 second\n#\n")

        assert graph.items() == [(1, "first")]

    def test_edge_to_unknown_node_dropped(self):
        """Test that edges to undeclared nodes are silently skipped."""
        graph = parse("1 a\n2 b\n#\n1 2\n2 3\n")

        assert graph.edges() == [Edge(1, 2)]

    def test_parse_sections_keeps_raw_pairs(self):
        """Test reading the sections without building a graph."""
        nodes, edges = TGFParser().parse_sections("1 a\n1 b\n#\n1 9\n")

        assert nodes == [(1, "a"), (1, "b")]
        assert edges == [(1, 9)]

    def test_custom_codec(self):
        """Test plugging in a codec for another value type."""
        upper = FunctionCodec("upper", str.lower, str.upper)

        graph = parse("1 ABC\n#\n", upper)

        assert graph.value_of(1) == "abc"
        assert serialize(graph, upper) == "1 ABC\n#\n"


class TestSerialize:
    """Tests for writing TGF documents."""

    def test_serialize_empty_graph(self):
        """Test that an empty graph is just the delimiter."""
        assert serialize(Graph()) == "#\n"

    def test_serialize_is_sorted(self):
        """Test canonical node and edge order."""
        graph = Graph.from_pairs([(2, "b"), (1, "a")], [(2, 1), (1, 2)])

        assert serialize(graph) == "1 a\n2 b\n#\n1 2\n2 1\n"

    def test_serialize_months(self):
        """Test that the months fixture serializes back to sorted text."""
        text = serialize(months_graph())

        assert text.startswith("1 January\n2 March\n")
        assert "\n#\n1 2\n3 2\n4 3\n5 1\n5 3\n" in text

    def test_serialize_graph_simple(self):
        """Test that the simple graph survives a round trip."""
        graph = parse(SIMPLE_GRAPH)

        assert parse(serialize(graph)) == graph

    def test_serialize_graph_complex(self):
        """Test that the months graph survives a round trip."""
        graph = parse(MONTHS_GRAPH)

        assert parse(serialize(graph)) == graph

    def test_serialize_integers(self):
        """Test that integer values round trip with the int codec."""
        graph = parse(INTEGER_GRAPH, INT_CODEC)

        assert parse(serialize(graph, INT_CODEC), INT_CODEC) == graph

    def test_serialize_after_mutation(self):
        """Test round trip after deleting a node."""
        graph = months_graph()
        graph.delete_node(7)

        again = parse(serialize(graph))

        assert again.node_count == 6
        assert again.edge_count == 7

    def test_serialize_rejects_line_break(self):
        """Test that a multi-line value cannot be written."""
        graph = Graph.from_pairs([(1, "two\nlines")], [])

        with pytest.raises(ValueError):
            serialize(graph)

    def test_serialize_rejects_leading_whitespace(self):
        """Test that a value the parser would trim cannot be written."""
        graph = Graph.from_pairs([(1, " padded")], [])

        with pytest.raises(ValueError):
            serialize(graph)

    def test_dumps_and_loads_aliases(self):
        """Test the json-style names for serialize and parse."""
        graph = months_graph()

        assert dumps(graph) == serialize(graph)
        assert loads(dumps(graph)) == graph
