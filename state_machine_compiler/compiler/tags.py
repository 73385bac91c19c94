"""
Normalize tag mappings into the CloudFormation ``[{Key, Value}]`` form.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional


def to_tags(tags: Optional[Mapping[str, Any]]) -> List[Dict[str, str]]:
    if not tags:
        return []
    return [{"Key": str(key), "Value": _stringify(value)} for key, value in tags.items()]


def _stringify(value: Any) -> str:
    # Tag values are rendered the way YAML authors wrote them, not Python reprs.
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
