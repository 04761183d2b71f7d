"""
Trivial Graph Format (TGF) Codec

Reads and writes the two-section, line-oriented text encoding of a Graph:

    1 January
    2 March
    #
    1 2

Format:
    - Node section: one "<id> <value>" record per line
    - A line containing only "#" ends the node section
    - Edge section: one "<source> <target>" record per line
    - Ids are unsigned 64-bit decimal integers
    - Id and value are separated by spaces or tabs; the value runs to the
      end of the line and is decoded by a ValueCodec
    - Lines end with "\\n" or "\\r\\n"; blank lines at the end are ignored

Parsing is all-or-nothing: every line is checked before the graph is
built, and the first bad line raises TGFParseError with its position.
The graph is then assembled with the same rules as Graph.from_pairs, so
duplicate node ids keep their first value and edges to unknown nodes are
dropped.

Serialization writes nodes by ascending id and edges by ascending
(source, target), so equal graphs always produce identical text.
"""

import re
from typing import Any, Iterable, Iterator, Optional, TypeVar

from tgfgraph.codec.values import NODE_ID_CODEC, STRING_CODEC, ValueCodec
from tgfgraph.graph import Graph
from tgfgraph.models import MAX_NODE_ID, NodeId

T = TypeVar("T")

SECTION_DELIMITER = "#"

_RECORD_RE = re.compile(r"(?P<id>[^ \t]*)(?P<sep>[ \t]*)(?P<value>.*)", re.DOTALL)
_DIGITS_RE = re.compile(r"[0-9]+")


class TGFParseError(ValueError):
    """
    Raised when text is not valid TGF.

    Attributes:
        line: 1-indexed line of the offending input, None when the text
            was not read from a document (see parse_value)
        column: 1-indexed column where the problem starts, or None
        fragment: The offending piece of text
        reason: Human readable description of the problem
    """

    def __init__(
        self,
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        fragment: str = "",
    ) -> None:
        self.reason = reason
        self.line = line
        self.column = column
        self.fragment = fragment
        if line is None:
            message = f"Parse error: {reason}"
        elif column is None:
            message = f"Parse error at line {line}: {reason}"
        else:
            message = f"Parse error at line {line}, column {column}: {reason}"
        if fragment:
            message += f" (near {fragment!r})"
        super().__init__(message)


def _split_lines(text: str) -> list[str]:
    """Split on line terminators, dropping a single trailing "\\r" per line."""
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    # Trailing blank lines (including the one after a final newline) are noise
    while lines and lines[-1] == "":
        lines.pop()
    return lines


def _parse_node_id(token: str, line_no: int, column: int) -> NodeId:
    if not _DIGITS_RE.fullmatch(token):
        raise TGFParseError("expected a node id", line_no, column, token)
    node_id = int(token)
    if node_id > MAX_NODE_ID:
        raise TGFParseError("node id does not fit in 64 bits", line_no, column, token)
    return node_id


def parse_value(text: str, codec: ValueCodec[T] = STRING_CODEC) -> T:
    """
    Decode a single value with a codec.

    Args:
        text: The full value text, without the line terminator
        codec: Codec for the value type

    Returns:
        The decoded value

    Raises:
        TGFParseError: If the codec rejects the text; line and column are
            left unset since the text has no position in a document
    """
    try:
        return codec.parse(text)
    except ValueError as e:
        raise TGFParseError(f"invalid {codec.name} value: {e}", fragment=text) from e


class TGFParser:
    """
    Line-by-line TGF reader.

    Walks the input once, tracking line numbers so that errors can point
    at the exact record that failed. Nothing is built until the whole
    input has been read.

    Usage:
        parser = TGFParser(INT_CODEC)
        graph = parser.parse("1 10\\n2 20\\n#\\n1 2\\n")
    """

    def __init__(self, codec: ValueCodec[Any] = STRING_CODEC) -> None:
        """
        Initialize the parser.

        Args:
            codec: Codec used for node values
        """
        self.codec = codec

    def parse_record(
        self, line: str, line_no: int, codec: Optional[ValueCodec[Any]] = None
    ) -> tuple[NodeId, Any]:
        """
        Parse one "<id> <value>" record.

        Args:
            line: The line without its terminator
            line_no: 1-indexed line number for error reporting
            codec: Codec for the value part (defaults to the node codec)

        Returns:
            (id, value) tuple

        Raises:
            TGFParseError: If the id, separator or value is malformed
        """
        codec = codec or self.codec
        match = _RECORD_RE.fullmatch(line)
        if match is None:
            raise TGFParseError("malformed record", line_no, 1, line)

        token = match.group("id")
        node_id = _parse_node_id(token, line_no, 1)

        if not match.group("sep"):
            raise TGFParseError(
                "expected a space after the node id", line_no, len(token) + 1, line
            )

        value_text = match.group("value")
        column = match.start("value") + 1
        try:
            value = codec.parse(value_text)
        except ValueError as e:
            raise TGFParseError(
                f"invalid {codec.name} value: {e}", line_no, column, value_text
            ) from e
        return node_id, value

    def iter_records(
        self, lines: Iterable[tuple[int, str]], codec: ValueCodec[Any]
    ) -> Iterator[tuple[NodeId, Any]]:
        for line_no, line in lines:
            if line == "":
                raise TGFParseError("unexpected empty line", line_no)
            yield self.parse_record(line, line_no, codec)

    def parse_sections(
        self, text: str
    ) -> tuple[list[tuple[NodeId, Any]], list[tuple[NodeId, NodeId]]]:
        """
        Parse text into its node pairs and edge pairs without building a graph.

        Args:
            text: Complete TGF document

        Returns:
            (node_pairs, edge_pairs) in input order

        Raises:
            TGFParseError: On the first malformed line or a missing delimiter
        """
        lines = _split_lines(text)
        numbered = list(enumerate(lines, start=1))

        delimiter_index = next(
            (index for index, line in enumerate(lines) if line == SECTION_DELIMITER), None
        )

        if delimiter_index is None:
            # A bad node line is the likelier culprit, report it first
            list(self.iter_records(numbered, self.codec))
            raise TGFParseError(
                f"missing {SECTION_DELIMITER!r} section delimiter", len(lines) + 1
            )

        nodes = list(self.iter_records(numbered[:delimiter_index], self.codec))
        edges = list(self.iter_records(numbered[delimiter_index + 1 :], NODE_ID_CODEC))
        return nodes, edges

    def parse(self, text: str) -> Graph[Any]:
        """
        Parse a TGF document into a Graph.

        Args:
            text: Complete TGF document

        Returns:
            The graph described by the text

        Raises:
            TGFParseError: If any part of the text is invalid; no partial
                graph is ever returned
        """
        nodes, edges = self.parse_sections(text)
        return Graph.from_pairs(nodes, edges)


def parse_pairs(text: str, codec: ValueCodec[T] = STRING_CODEC) -> list[tuple[NodeId, T]]:
    """
    Parse newline-separated "<id> <value>" records.

    Args:
        text: Records without a section delimiter; may be empty
        codec: Codec for the value part

    Returns:
        List of (id, value) tuples in input order

    Raises:
        TGFParseError: On the first malformed record

    Example:
        >>> parse_pairs("1 2\\n3 2", NODE_ID_CODEC)
        [(1, 2), (3, 2)]
    """
    parser = TGFParser(codec)
    return list(parser.iter_records(enumerate(_split_lines(text), start=1), codec))


def parse(text: str, codec: ValueCodec[T] = STRING_CODEC) -> Graph[T]:
    """
    Parse a TGF document into a Graph.

    Args:
        text: Complete TGF document
        codec: Codec for node values (defaults to plain strings)

    Returns:
        The parsed Graph

    Raises:
        TGFParseError: If the document is malformed or a value is rejected
    """
    return TGFParser(codec).parse(text)


def serialize(graph: Graph[T], codec: ValueCodec[T] = STRING_CODEC) -> str:
    """
    Encode a Graph as TGF text.

    Args:
        graph: The graph to encode
        codec: Codec for node values (defaults to str())

    Returns:
        The TGF document, each record terminated by "\\n"

    Raises:
        ValueError: If a rendered value contains a line terminator or starts
            with whitespace, since it could not be read back
    """
    lines = []
    for node_id, value in graph.items():
        text = codec.render(value)
        if "\n" in text or "\r" in text:
            raise ValueError(f"Value of node {node_id} contains a line break: {text!r}")
        if text[:1] in (" ", "\t"):
            raise ValueError(f"Value of node {node_id} starts with whitespace: {text!r}")
        lines.append(f"{node_id} {text}\n")
    lines.append(f"{SECTION_DELIMITER}\n")
    lines.extend(f"{edge.source} {edge.target}\n" for edge in graph.edges())
    return "".join(lines)


# json-style aliases
loads = parse
dumps = serialize
