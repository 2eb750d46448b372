"""
Human-readable rendering of untyped configuration trees.

Rendering rules:
- Scalars print as ``<indent><Key>: <value>`` with two spaces of indent per depth.
- Floats are truncated toward zero before printing (3.9 -> 3, -2.5 -> -2).
- Mappings print a blank line and a bare header (when keyed), their children
  in ascending key order one level deeper, then a trailing blank line.
- A ``handlers`` sequence of scalars prints inline as ``Handlers: [ a,b ]``;
  any other sequence prints a header and its elements unlabeled.
- Keys are formatted by replacing underscores with spaces and upper-casing
  the first letter of every word.

Values that cannot be rendered do not stop the pass: a marker line is written
in their place and a diagnostic is returned to the caller.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, List

import typer

from .config_tree import (
    DEFAULT_MAX_DEPTH,
    SCALAR_TYPES,
    ConfigNode,
    FloatValue,
    IntegerValue,
    MappingValue,
    NullValue,
    SequenceValue,
    StringValue,
    TruncatedValue,
    UnknownValue,
    decode,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ValueRenderer",
    "RenderDiagnostic",
    "UnrenderableValue",
    "DepthExceeded",
    "format_key",
    "render_text",
]

INLINE_SEQUENCE_KEY = "handlers"


@dataclass(frozen=True)
class RenderDiagnostic:
    """Something at ``path`` could not be rendered normally."""
    path: str


@dataclass(frozen=True)
class UnrenderableValue(RenderDiagnostic):
    raw: Any
    type_name: str


@dataclass(frozen=True)
class DepthExceeded(RenderDiagnostic):
    limit: int


def format_key(key: str) -> str:
    """
    Format a config key for display.

    >>> format_key("primary_region")
    'Primary Region'
    >>> format_key("httpChecks")
    'HttpChecks'
    """
    # separators are kept so tabs and newlines survive
    parts = re.split(r"(\s+)", key.replace("_", " "))
    return "".join(p[:1].upper() + p[1:] for p in parts)


def _scalar_text(node: ConfigNode) -> str:
    """Textual form of a scalar inside an inline sequence."""
    if isinstance(node, StringValue):
        return node.value
    if isinstance(node, IntegerValue):
        return str(node.value)
    if isinstance(node, FloatValue):
        if node.value.is_integer():
            return str(int(node.value))
        return repr(node.value)
    return "null"


def _child_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


class ValueRenderer:
    """
    Writes a configuration tree as indented text.

    Args:
        write: Line sink (defaults to ``typer.echo``)
        max_depth: Containers nested this many levels below the rendered
            root are not expanded
    """

    def __init__(self, write: Callable[[str], None] = typer.echo, max_depth: int = DEFAULT_MAX_DEPTH):
        self.write = write
        self.max_depth = max_depth

    def render(self, tree: Any, key: str = "", depth: int = 0) -> List[RenderDiagnostic]:
        """
        Render ``tree`` under ``key`` starting at indentation ``depth``.

        Returns:
            Diagnostics for every node that could not be rendered
        """
        diagnostics: List[RenderDiagnostic] = []
        node = decode(tree, self.max_depth)
        self._render(node, key, depth, 0, key, diagnostics)
        return diagnostics

    def _render(self, node: ConfigNode, key: str, depth: int, level: int,
                path: str, diagnostics: List[RenderDiagnostic]) -> None:
        indent = "  " * depth
        label = format_key(key)

        if isinstance(node, TruncatedValue) or (
            isinstance(node, (MappingValue, SequenceValue)) and level >= self.max_depth
        ):
            self.write(f"{indent}! depth limit {self.max_depth} exceeded at {path or '<root>'}")
            diagnostics.append(DepthExceeded(path=path, limit=self.max_depth))
            return

        if isinstance(node, (StringValue, IntegerValue)):
            self.write(f"{indent}{label}: {node.value}")

        elif isinstance(node, FloatValue):
            if not math.isfinite(node.value):
                self._unrenderable(node.value, indent, path, diagnostics)
                return
            self.write(f"{indent}{label}: {math.trunc(node.value)}")

        elif isinstance(node, NullValue):
            self.write(f"{indent}{label}: null")

        elif isinstance(node, MappingValue):
            if key:
                self.write("")
                self.write(f"{indent}{label}")
            for k in sorted(node.entries):
                self._render(node.entries[k], k, depth + 1, level + 1,
                             _child_path(path, k), diagnostics)
            self.write("")

        elif isinstance(node, SequenceValue):
            if key == INLINE_SEQUENCE_KEY and all(isinstance(i, SCALAR_TYPES) for i in node.items):
                joined = ",".join(_scalar_text(i) for i in node.items)
                self.write(f"{indent}{label}: [ {joined} ]")
                return
            if key:
                self.write("")
                self.write(f"{indent}{label}")
            for i, item in enumerate(node.items):
                self._render(item, "", depth + 1, level + 1, f"{path}[{i}]", diagnostics)

        else:
            raw = node.raw if isinstance(node, UnknownValue) else node
            self._unrenderable(raw, indent, path, diagnostics)

    def _unrenderable(self, raw: Any, indent: str, path: str,
                      diagnostics: List[RenderDiagnostic]) -> None:
        type_name = type(raw).__name__
        logger.warning(f"Cannot render value at {path or '<root>'}: {raw!r} ({type_name})")
        self.write(f"{indent}! unrenderable value at {path or '<root>'}")
        self.write(f"{indent}  {raw!r} ({type_name})")
        diagnostics.append(UnrenderableValue(path=path, raw=raw, type_name=type_name))


def render_text(tree: Any, key: str = "", depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Render ``tree`` and return the output as a single string."""
    lines: List[str] = []
    ValueRenderer(write=lines.append, max_depth=max_depth).render(tree, key, depth)
    return "".join(f"{line}\n" for line in lines)
