"""Dot-path access over nested plain dicts.

Paths look like ``"config.default_model"`` or ``"limits.daily"``. Reads never
raise on missing intermediates. Writes never mutate their input: every dict on
the written path is shallow-copied, every sibling branch is shared by reference
with the source.
"""

from __future__ import annotations

from typing import Any, Generic, Mapping, TypeVar

T = TypeVar("T")

JsonObj = dict[str, Any]


def split_path(path: str) -> list[str]:
    if not path:
        raise ValueError("Path cannot be empty")
    return path.split(".")


def get_by_path(obj: Mapping[str, Any] | None, path: str) -> Any:
    """Return the value at ``path`` or ``None`` if any segment is absent."""
    current: Any = obj
    for key in split_path(path):
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def has_path(obj: Mapping[str, Any] | None, path: str) -> bool:
    current: Any = obj
    for key in split_path(path):
        if not isinstance(current, Mapping) or key not in current:
            return False
        current = current[key]
    return True


def set_by_path(obj: Mapping[str, Any] | None, path: str, value: Any) -> JsonObj:
    """Return a copy of ``obj`` with ``path`` set to ``value``.

    Only the dicts along ``path`` are copied (one shallow copy per segment);
    intermediates that are missing or not dicts are replaced with new dicts.
    """
    keys = split_path(path)
    root: JsonObj = dict(obj or {})
    current = root
    for key in keys[:-1]:
        child = current.get(key)
        current[key] = dict(child) if isinstance(child, Mapping) else {}
        current = current[key]
    current[keys[-1]] = value
    return root


class Lens(Generic[T]):
    """A get/set pair bound to one path.

    >>> daily = Lens[int]("limits.daily")
    >>> daily.set({}, 5)
    {'limits': {'daily': 5}}
    """

    __slots__ = ("path",)

    def __init__(self, path: str):
        split_path(path)
        self.path = path

    def get(self, obj: Mapping[str, Any] | None, default: T | None = None) -> T | None:
        value = get_by_path(obj, self.path)
        return default if value is None else value

    def set(self, obj: Mapping[str, Any] | None, value: T) -> JsonObj:
        return set_by_path(obj, self.path, value)

    def update(self, obj: Mapping[str, Any] | None, fn) -> JsonObj:
        return self.set(obj, fn(self.get(obj)))

    def __truediv__(self, key: str) -> "Lens[Any]":
        return Lens(f"{self.path}.{key}")

    def __repr__(self) -> str:
        return f"Lens({self.path!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Lens) and other.path == self.path

    def __hash__(self) -> int:
        return hash(self.path)
