"""
Operation requests sent to the control plane.

A request is a named operation document plus its bound variables. Requests
are immutable: binding a variable returns a new request.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel

__all__ = ["OperationKind", "OperationRequest"]


class OperationKind(str, Enum):
    """Whether an operation reads or changes remote state."""
    QUERY = "query"
    MUTATION = "mutation"


def _freeze(value: Any) -> Any:
    """Convert a variable value into a read-only copy of its wire form."""
    if isinstance(value, BaseModel):
        return _freeze(value.model_dump(mode="json", by_alias=True, exclude_none=True))
    if isinstance(value, Mapping):
        return MappingProxyType({str(k): _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, Enum):
        return value.value
    return value


def _thaw(value: Any) -> Any:
    """Plain dicts and lists for JSON encoding."""
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class OperationRequest:
    """
    A named remote operation with bound variables.

    Build with ``OperationRequest.query(...)`` / ``OperationRequest.mutation(...)``
    and bind variables with ``with_var``::

        req = OperationRequest.query("getConfig", DOC).with_var("appName", "web")
    """
    name: str
    document: str
    kind: OperationKind = OperationKind.QUERY
    variables: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        if not self.name:
            raise ValueError("operation name is required")
        if not self.document or not self.document.strip():
            raise ValueError(f"operation '{self.name}' has an empty document")
        object.__setattr__(self, "variables", _freeze(self.variables))

    @classmethod
    def query(cls, name: str, document: str) -> OperationRequest:
        return cls(name=name, document=document, kind=OperationKind.QUERY)

    @classmethod
    def mutation(cls, name: str, document: str) -> OperationRequest:
        return cls(name=name, document=document, kind=OperationKind.MUTATION)

    def with_var(self, name: str, value: Any) -> OperationRequest:
        """
        Return a copy of this request with one more variable bound.

        Raises:
            ValueError: If ``name`` is already bound on this request
        """
        if name in self.variables:
            raise ValueError(f"variable '{name}' already bound on operation '{self.name}'")
        variables = dict(self.variables)
        variables[name] = value
        return replace(self, variables=variables)

    def payload(self) -> dict:
        """JSON body for the wire."""
        return {
            "query": self.document,
            "variables": _thaw(self.variables),
        }
