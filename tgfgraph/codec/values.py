"""
Value Codecs for tgfgraph

A value codec turns the text after a node id into a Python value and back.
The TGF codec is generic over the node value type; whatever type the
graph stores only has to supply one of these.

Built-in codecs:
    - STRING_CODEC: the text itself, never fails
    - INT_CODEC: signed decimal integers ("-42", "+7")
    - FLOAT_CODEC: decimal or scientific floats ("3.5", "1e-3", "nan")
    - NODE_ID_CODEC: unsigned 64-bit node ids, used for edge targets

Parsers reject input by raising ValueError. They are strict: surrounding
whitespace, digit separators and empty strings are refused so that render
and parse stay inverses.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar

from tgfgraph.models import MAX_NODE_ID

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DIGITS_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


class ValueCodec(Protocol[T]):
    """Anything with a parse and a render method can encode node values."""

    name: str

    def parse(self, text: str) -> T:
        """Turn text into a value; raise ValueError to reject it."""
        ...

    def render(self, value: T) -> str:
        """Turn a value into text that parse accepts."""
        ...


@dataclass(frozen=True)
class FunctionCodec(Generic[T]):
    """
    A ValueCodec assembled from two plain functions.

    Attributes:
        name: Short name used on the command line ("str", "int", ...)
        parse_func: Text to value, raising ValueError on bad input
        render_func: Value to text
    """

    name: str
    parse_func: Callable[[str], T]
    render_func: Callable[[T], str] = str

    def parse(self, text: str) -> T:
        return self.parse_func(text)

    def render(self, value: T) -> str:
        return self.render_func(value)


def _parse_str(text: str) -> str:
    return text


def _parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    return int(text)


def _parse_float(text: str) -> float:
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError(f"invalid float {text!r}")
    return float(text)


def _parse_node_id(text: str) -> int:
    if not _DIGITS_RE.fullmatch(text):
        raise ValueError(f"invalid node id {text!r}")
    value = int(text)
    if value > MAX_NODE_ID:
        raise ValueError(f"node id {text} does not fit in 64 bits")
    return value


STRING_CODEC: FunctionCodec[str] = FunctionCodec("str", _parse_str)
INT_CODEC: FunctionCodec[int] = FunctionCodec("int", _parse_int)
FLOAT_CODEC: FunctionCodec[float] = FunctionCodec("float", _parse_float, repr)
NODE_ID_CODEC: FunctionCodec[int] = FunctionCodec("id", _parse_node_id)

_CODECS: dict[str, ValueCodec[Any]] = {
    codec.name: codec for codec in (STRING_CODEC, INT_CODEC, FLOAT_CODEC)
}


def available_codecs() -> list[str]:
    """Names accepted by codec_for."""
    return list(_CODECS)


def codec_for(name: str) -> ValueCodec[Any]:
    """
    Look up a built-in value codec by name.

    Args:
        name: One of available_codecs()

    Returns:
        The matching codec

    Raises:
        KeyError: If no codec has that name
    """
    try:
        return _CODECS[name]
    except KeyError:
        raise KeyError(
            f"Unknown value type {name!r}; expected one of {', '.join(_CODECS)}"
        ) from None
