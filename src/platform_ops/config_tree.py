"""
Tagged variants for untyped configuration trees.

The control plane returns app configuration as arbitrary JSON. Decoding it
into explicit variants keeps the renderer's case analysis exhaustive: every
value is one of the known kinds, ``UnknownValue`` (decodes into none of
them, booleans included), or ``TruncatedValue`` (nested past the depth cap).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple, Union

__all__ = [
    "StringValue",
    "IntegerValue",
    "FloatValue",
    "NullValue",
    "MappingValue",
    "SequenceValue",
    "UnknownValue",
    "TruncatedValue",
    "ConfigNode",
    "SCALAR_TYPES",
    "DEFAULT_MAX_DEPTH",
    "decode",
]

DEFAULT_MAX_DEPTH = 32


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class IntegerValue:
    value: int


@dataclass(frozen=True)
class FloatValue:
    value: float


@dataclass(frozen=True)
class NullValue:
    pass


@dataclass(frozen=True)
class MappingValue:
    entries: Dict[str, "ConfigNode"]


@dataclass(frozen=True)
class SequenceValue:
    items: Tuple["ConfigNode", ...]


@dataclass(frozen=True)
class UnknownValue:
    """A value that is none of the known kinds."""
    raw: Any


@dataclass(frozen=True)
class TruncatedValue:
    """A subtree the decoder did not expand because it exceeded the depth cap."""
    raw: Any


ConfigNode = Union[
    StringValue,
    IntegerValue,
    FloatValue,
    NullValue,
    MappingValue,
    SequenceValue,
    UnknownValue,
    TruncatedValue,
]

SCALAR_TYPES = (StringValue, IntegerValue, FloatValue, NullValue)
_NODE_TYPES = SCALAR_TYPES + (MappingValue, SequenceValue, UnknownValue, TruncatedValue)


def decode(value: Any, max_depth: int = DEFAULT_MAX_DEPTH, _depth: int = 0) -> ConfigNode:
    """
    Decode a plain Python value (as produced by ``json.loads``) into variants.

    Already decoded nodes are returned unchanged. Containers nested more than
    ``max_depth`` levels below the root become ``TruncatedValue``.
    """
    if isinstance(value, _NODE_TYPES):
        return value
    if value is None:
        return NullValue()
    # bool is a subclass of int; it is not a known kind
    if isinstance(value, bool):
        return UnknownValue(value)
    if isinstance(value, str):
        return StringValue(value)
    if isinstance(value, int):
        return IntegerValue(value)
    if isinstance(value, float):
        return FloatValue(value)

    if isinstance(value, (Mapping, list, tuple)) and _depth >= max_depth:
        return TruncatedValue(value)
    if isinstance(value, Mapping):
        return MappingValue(
            {str(k): decode(v, max_depth, _depth + 1) for k, v in value.items()}
        )
    if isinstance(value, (list, tuple)):
        return SequenceValue(tuple(decode(v, max_depth, _depth + 1) for v in value))

    return UnknownValue(value)
