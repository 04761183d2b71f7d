"""
Codec module for tgfgraph.

This module provides the Trivial Graph Format reader/writer and the
pluggable value codecs it uses for node payloads.
"""

from tgfgraph.codec.tgf import (
    SECTION_DELIMITER,
    TGFParseError,
    TGFParser,
    dumps,
    loads,
    parse,
    parse_pairs,
    parse_value,
    serialize,
)
from tgfgraph.codec.values import (
    FLOAT_CODEC,
    INT_CODEC,
    NODE_ID_CODEC,
    STRING_CODEC,
    FunctionCodec,
    ValueCodec,
    available_codecs,
    codec_for,
)

__all__ = [
    "SECTION_DELIMITER",
    "TGFParseError",
    "TGFParser",
    "dumps",
    "loads",
    "parse",
    "parse_pairs",
    "parse_value",
    "serialize",
    "FLOAT_CODEC",
    "INT_CODEC",
    "NODE_ID_CODEC",
    "STRING_CODEC",
    "FunctionCodec",
    "ValueCodec",
    "available_codecs",
    "codec_for",
]
