"""Path normalisation and lookup against the metadata root."""

from __future__ import annotations

from typing import Any, Mapping, Sequence, Union

from pydantic import BaseModel

Token = Union[str, int]

CURRENT = "."
PARENT = ".."


class _NotFound:
    """Sentinel returned when a path does not resolve."""

    _instance: "_NotFound | None" = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()


def normalize_path(path: Sequence[Token]) -> list[Token]:
    """Drop ``"."`` tokens and apply ``".."`` tokens, never going above the root."""
    normalized: list[Token] = []
    for token in path:
        if token == CURRENT:
            continue
        if token == PARENT:
            if normalized:
                normalized.pop()
            continue
        normalized.append(token)
    return normalized


def make_id(path: Sequence[Token]) -> str:
    """Element id derived from a path: ``["form", "items", 0]`` -> ``/form/items/0``."""
    return "/" + "/".join(str(token) for token in path)


def _index(token: Token) -> int | None:
    if isinstance(token, bool):
        return None
    if isinstance(token, int):
        return token
    if isinstance(token, str) and token.isdigit():
        return int(token)
    return None


def _step(current: Any, token: Token) -> Any:
    if isinstance(current, Mapping):
        return current.get(token, NOT_FOUND)
    if isinstance(current, BaseModel):
        name = str(token)
        fields = type(current).model_fields
        for field_name, info in fields.items():
            if name in (field_name, info.alias):
                return getattr(current, field_name)
        extra = current.model_extra or {}
        return extra.get(name, NOT_FOUND)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        index = _index(token)
        if index is None or index < 0 or index >= len(current):
            return NOT_FOUND
        return current[index]
    return NOT_FOUND


def resolve(root: Any, path: Sequence[Token]) -> Any:
    """Return the value at *path* under *root*, or ``NOT_FOUND``.

    Mappings are indexed by key, pydantic models by field name or alias and
    sequences by non-negative index.  The tree is never modified.
    """
    current = root
    for token in normalize_path(path):
        current = _step(current, token)
        if current is NOT_FOUND or current is None:
            return NOT_FOUND
    return current
