"""
Discovery and extraction of CloudFormation intrinsic functions embedded in a
state machine definition.

Intrinsics such as ``{"Fn::GetAtt": ["Fn1", "Arn"]}`` cannot be serialized into
the definition string directly. They are swapped for ``${name}`` placeholders
and returned alongside the rewritten tree so the caller can build an
``Fn::Sub`` parameter map, e.g.::

    tree, pairs = extract_intrinsic_functions(definition, next_token)
    # pairs == [("smParam001", {"Ref": "MyTopic"}), ...]
"""

from __future__ import annotations

from typing import Any, List, Mapping, Tuple

from state_machine_compiler.compiler.placeholders import TokenGenerator

IntrinsicPair = Tuple[str, Any]


def is_intrinsic(value: Any) -> bool:
    """
    True for mappings carrying a ``Ref`` or ``Fn::*`` key.
    """

    if not isinstance(value, Mapping):
        return False
    return any(key == "Ref" or str(key).startswith("Fn::") for key in value)


def placeholder(token: str) -> str:
    return f"${{{token}}}"


def extract_intrinsic_functions(
    tree: Any, next_token: TokenGenerator
) -> Tuple[Any, List[IntrinsicPair]]:
    """
    Return a copy of ``tree`` with every intrinsic replaced by a placeholder,
    plus the ``(token, intrinsic)`` pairs in pre-order.

    Lists are visited by ascending index and mappings in key order. An
    intrinsic is replaced as a whole; its arguments are not visited. The input
    tree is left untouched.
    """

    pairs: List[IntrinsicPair] = []
    rewritten = _rewrite(tree, next_token, pairs)
    return rewritten, pairs


def _rewrite(value: Any, next_token: TokenGenerator, pairs: List[IntrinsicPair]) -> Any:
    if isinstance(value, list):
        return [_rewrite(item, next_token, pairs) for item in value]

    if is_intrinsic(value):
        token = next_token()
        pairs.append((token, value))
        return placeholder(token)

    if isinstance(value, Mapping):
        return {key: _rewrite(item, next_token, pairs) for key, item in value.items()}

    return value
