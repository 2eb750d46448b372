"""
Response unwrapping.

Walks a dotted path into an envelope's data tree and coerces the value found
there into the caller's result model. Pure functions: no I/O, the envelope is
never mutated.
"""
from __future__ import annotations

from typing import Any, List, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..errors import MissingFieldError
from .envelope import RemoteEnvelope

T = TypeVar("T", bound=BaseModel)

Path = Union[str, Sequence[Union[str, int]]]

__all__ = ["unwrap", "unwrap_as", "unwrap_list_as"]


def _segments(path: Path) -> List[Union[str, int]]:
    if isinstance(path, str):
        parts: List[Union[str, int]] = []
        for part in path.split("."):
            if not part:
                raise ValueError(f"Invalid response path: {path!r}")
            parts.append(int(part) if part.isdigit() else part)
        return parts
    return list(path)


def _join(segments: Sequence[Union[str, int]]) -> str:
    return ".".join(str(s) for s in segments)


def unwrap(envelope: RemoteEnvelope, path: Path) -> Any:
    """
    Return the value at ``path`` inside the envelope's data.

    Args:
        envelope: Decoded response
        path: Dotted string ("app.postgresAppRole.users") or segment sequence;
            integer segments index into lists

    Returns:
        The (non-null) value found at the path

    Raises:
        MissingFieldError: If data is absent or any segment is absent/null
    """
    segments = _segments(path)
    full = _join(segments)

    if envelope.data is None:
        raise MissingFieldError(full, "data")

    current: Any = envelope.data
    for i, segment in enumerate(segments):
        here = _join(segments[: i + 1])
        if isinstance(segment, int):
            if not isinstance(current, list) or not -len(current) <= segment < len(current):
                raise MissingFieldError(full, here)
            current = current[segment]
        else:
            if not isinstance(current, dict):
                raise MissingFieldError(full, here)
            current = current.get(segment)
        if current is None:
            raise MissingFieldError(full, here)
    return current


def _validate(model: Type[T], value: Any, full: str) -> T:
    try:
        return model.model_validate(value)
    except ValidationError as e:
        errors = e.errors()
        loc = _join(errors[0]["loc"]) if errors and errors[0].get("loc") else ""
        raise MissingFieldError(full, f"{full}.{loc}" if loc else full) from e


def unwrap_as(envelope: RemoteEnvelope, path: Path, model: Type[T]) -> T:
    """Unwrap ``path`` and coerce it into ``model``."""
    full = _join(_segments(path))
    return _validate(model, unwrap(envelope, path), full)


def unwrap_list_as(envelope: RemoteEnvelope, path: Path, model: Type[T]) -> List[T]:
    """Unwrap a list at ``path`` and coerce each element into ``model``."""
    full = _join(_segments(path))
    value = unwrap(envelope, path)
    if not isinstance(value, list):
        raise MissingFieldError(full)
    return [_validate(model, item, f"{full}.{i}") for i, item in enumerate(value)]
