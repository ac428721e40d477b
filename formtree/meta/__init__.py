"""formtree metadata layer.

Typed models for the declarative metadata tree, the named check registry used
by file-based metadata, and YAML/JSON loading.

Usage::

    from formtree.meta import load_meta

    tree = load_meta("forms.yaml")
    print(tree.refs())
"""

from formtree.meta.checks import register_check
from formtree.meta.loader import MetaLoadError, load_meta
from formtree.meta.models import (
    OPTIONS_KEY,
    Choice,
    MetaNode,
    MetaOptions,
    MetaTree,
    node_type,
    parse_node,
)

__all__ = [
    "OPTIONS_KEY",
    "Choice",
    "MetaLoadError",
    "MetaNode",
    "MetaOptions",
    "MetaTree",
    "load_meta",
    "node_type",
    "parse_node",
    "register_check",
]
