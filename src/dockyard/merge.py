"""Recursive merge of partial configuration trees onto complete defaults.

Policy, applied uniformly at every depth:

* dict onto dict: merged key by key, keys only present in the override are kept
* list onto anything: the list replaces
* scalar onto anything: the scalar replaces
* ``None`` onto anything: replaces, unless ``none_keeps_base`` is set
* ``None`` onto a dict: keeps the dict when ``none_keeps_mappings`` is set

Neither input is mutated. Containers coming from the base are deep-copied so
callers can edit the result without touching module-level defaults.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping, TypeVar

T = TypeVar("T")


def deep_merge(
    base: Any,
    override: Any,
    *,
    none_keeps_base: bool = False,
    none_keeps_mappings: bool = False,
) -> Any:
    if override is None and (none_keeps_base or (none_keeps_mappings and isinstance(base, Mapping))):
        return copy.deepcopy(base)

    if isinstance(base, Mapping) and isinstance(override, Mapping):
        merged = {key: copy.deepcopy(value) for key, value in base.items()}
        for key, value in override.items():
            if key in merged:
                merged[key] = deep_merge(
                    merged[key],
                    value,
                    none_keeps_base=none_keeps_base,
                    none_keeps_mappings=none_keeps_mappings,
                )
            else:
                merged[key] = copy.deepcopy(value)
        return merged

    return copy.deepcopy(override)


def merge_with_initial(initial: T, saved: Mapping[str, Any] | None = None) -> T:
    """Overlay a previously saved service config on a schema's ``initial`` shape.

    Saved ``None`` values fall back to the initial value so a sparse record
    coming back from the API never blanks out a default.
    """
    if not saved:
        return copy.deepcopy(initial)
    return deep_merge(initial, saved, none_keeps_base=True)
