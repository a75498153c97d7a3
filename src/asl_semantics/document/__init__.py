"""
Document Module

This module provides the position-annotated syntax tree for JSON and YAML ASL
documents and the loader that builds it.

Available components:
- ast_nodes: Node classes and navigation helpers around "States"
- loader: DocumentLoader and AslDocument (text, language, tree and position mapping)
"""

from .ast_nodes import (
    ArrayNode,
    AstNode,
    BooleanNode,
    NullNode,
    NumberNode,
    ObjectNode,
    PropertyNode,
    StringNode,
    find_closest_ancestor_node_by_name,
    find_closest_ancestor_states_node,
    find_node_at_location,
    find_prop_child_by_name,
    get_list_of_state_names_from_states_node,
    get_state_info,
    inside_state_node,
    is_child_of_states,
)
from .loader import (
    JSON_LANGUAGE_ID,
    YAML_LANGUAGE_ID,
    AslDocument,
    DocumentLoader,
    Position,
    Range,
    load_document,
)

__all__ = [
    "ArrayNode",
    "AstNode",
    "BooleanNode",
    "NullNode",
    "NumberNode",
    "ObjectNode",
    "PropertyNode",
    "StringNode",
    "find_closest_ancestor_node_by_name",
    "find_closest_ancestor_states_node",
    "find_node_at_location",
    "find_prop_child_by_name",
    "get_list_of_state_names_from_states_node",
    "get_state_info",
    "inside_state_node",
    "is_child_of_states",
    "JSON_LANGUAGE_ID",
    "YAML_LANGUAGE_ID",
    "AslDocument",
    "DocumentLoader",
    "Position",
    "Range",
    "load_document",
]
