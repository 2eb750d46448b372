"""
Decoded response envelope.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

__all__ = ["RemoteEnvelope"]


@dataclass(frozen=True)
class RemoteEnvelope:
    """
    Top-level decoded response: the data tree plus remote error messages.

    ``data`` maps operation/field names (or their aliases) to arbitrary
    nested values. ``errors`` keeps the server's ordering.
    """
    data: Optional[dict] = None
    errors: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: dict) -> RemoteEnvelope:
        """
        Build an envelope from a decoded JSON response object.

        Error entries are usually ``{"message": ..., "path": ...}`` objects;
        bare strings are accepted as well.
        """
        data = payload.get("data")
        if data is not None and not isinstance(data, dict):
            raise ValueError(f"response data must be an object, got {type(data).__name__}")

        errors = payload.get("errors")
        if errors is not None and not isinstance(errors, list):
            raise ValueError(f"response errors must be a list, got {type(errors).__name__}")

        messages = []
        for entry in errors or []:
            if isinstance(entry, dict):
                messages.append(str(entry.get("message", entry)))
            else:
                messages.append(str(entry))
        return cls(data=data, errors=tuple(messages))

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
