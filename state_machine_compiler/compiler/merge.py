"""
Deep merge of compiled fragments into the cumulative template.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping


def deep_merge(target: MutableMapping[str, Any], source: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """
    Merge ``source`` into ``target`` in place.

    Nested mappings are merged key by key; any other value in ``source``
    replaces the one in ``target``.
    """

    for key, value in source.items():
        existing = target.get(key)
        if isinstance(existing, MutableMapping) and isinstance(value, Mapping):
            deep_merge(existing, value)
        else:
            target[key] = value
    return target
