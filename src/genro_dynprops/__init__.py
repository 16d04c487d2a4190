# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-DynProps - Observable property trees built from JSON documents.

A lightweight, zero-dependency library that turns a JSON object into a
tree of observable nodes, addressable by key or dotted/indexed path, and
renders it back to JSON. Designed for data-bound user interfaces in the
Genro ecosystem (Genro Kyō).
"""

__version__ = "0.1.0"

from .bindings import DateTimeBinding, NumericBinding, TextBinding
from .dynamic import DynamicAccessor
from .exceptions import DynPropsError, ParseError, SerializationError
from .guard import ReentrancyGuard
from .ingest import build_value, load_json, parse
from .node import NodeKind, PropertyNode
from .numbers import NumberKind, classify_number, decode_number, parse_number_text
from .options import DEFAULT_OPTIONS, JsonOptions, ParseMode
from .paths import PathResolution, PathSegment, parse_path, resolve
from .serializer import serialize, to_plain
from .store import ChangeEvent, DynamicList, DynamicProperties
from .views import JsonView, PathView

__all__ = [
    # Core classes
    "DynamicProperties",
    "DynamicList",
    "PropertyNode",
    "NodeKind",
    "ChangeEvent",
    "DynamicAccessor",
    # JSON
    "parse",
    "load_json",
    "build_value",
    "serialize",
    "to_plain",
    "JsonOptions",
    "ParseMode",
    "DEFAULT_OPTIONS",
    # Numbers
    "NumberKind",
    "classify_number",
    "decode_number",
    "parse_number_text",
    # Paths
    "PathResolution",
    "PathSegment",
    "parse_path",
    "resolve",
    # Views and bindings
    "JsonView",
    "PathView",
    "ReentrancyGuard",
    "TextBinding",
    "NumericBinding",
    "DateTimeBinding",
    # Exceptions
    "DynPropsError",
    "ParseError",
    "SerializationError",
]
