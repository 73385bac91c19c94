"""
YAML loading with CloudFormation short-form intrinsic tags.

``!GetAtt hello.Arn`` becomes ``{"Fn::GetAtt": ["hello", "Arn"]}``, ``!Ref X``
becomes ``{"Ref": "X"}`` and every other ``!Name`` tag becomes ``{"Fn::Name": ...}``.
"""

from __future__ import annotations

from typing import Any

import yaml


class CloudFormationLoader(yaml.SafeLoader):
    pass


# Timestamps stay strings so definitions serialize exactly as written.
CloudFormationLoader.yaml_implicit_resolvers = {
    first: [resolver for resolver in resolvers if resolver[0] != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _construct_node(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
    if isinstance(node, yaml.ScalarNode):
        return loader.construct_scalar(node)
    if isinstance(node, yaml.SequenceNode):
        return loader.construct_sequence(node, deep=True)
    return loader.construct_mapping(node, deep=True)


def _construct_intrinsic(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> Any:
    value = _construct_node(loader, node)
    if tag_suffix in ("Ref", "Condition"):
        return {tag_suffix: value}
    if tag_suffix == "GetAtt" and isinstance(value, str):
        target, _, attribute = value.partition(".")
        return {"Fn::GetAtt": [target, attribute]}
    return {f"Fn::{tag_suffix}": value}


CloudFormationLoader.add_multi_constructor("!", _construct_intrinsic)


def load_yaml(stream: Any) -> Any:
    return yaml.load(stream, Loader=CloudFormationLoader)
