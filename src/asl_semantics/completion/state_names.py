"""
State name completion for StartAt, Next and Default fields.
"""

from typing import List, Optional

from ..document.ast_nodes import (
    AstNode,
    PropertyNode,
    find_closest_ancestor_states_node,
    find_prop_child_by_name,
    get_list_of_state_names_from_states_node,
    is_property_node,
    is_string_node,
)
from ..options import AslOptions

START_AT_PROPERTY = "StartAt"
STATE_REFERENCE_PROPERTIES = ("Next", "Default")


def _get_states_from_start_at(node: PropertyNode, options: AslOptions) -> List[str]:
    states_node = find_prop_child_by_name(node.parent, "States")
    if states_node is None:
        return []
    return get_list_of_state_names_from_states_node(states_node, options.ignore_colon_offset)


def _get_enclosing_state_name(node: PropertyNode) -> Optional[str]:
    """
    Name of the state declaring a Next/Default property.

    A state-level field sits two levels below the state property; a Choice rule's
    Next sits two levels further down (rule object, Choices array).
    """
    state_item = node.parent.parent if node.parent is not None else None
    if is_property_node(state_item):
        return state_item.key

    rule_owner = state_item
    for _ in range(3):
        rule_owner = rule_owner.parent if rule_owner is not None else None
    if is_property_node(rule_owner):
        return rule_owner.key
    return None


def get_state_name_candidates(node: PropertyNode, options: Optional[AslOptions] = None) -> List[str]:
    """
    List the state names that fit the value of a StartAt, Next or Default property.

    Args:
        node: Property node being completed
        options: Analysis options

    Returns:
        Candidate state names in declaration order, empty for any other property
    """
    options = options or AslOptions()
    key = node.key

    if key == START_AT_PROPERTY:
        return _get_states_from_start_at(node, options)

    if key in STATE_REFERENCE_PROPERTIES:
        states_node = find_closest_ancestor_states_node(node)
        if states_node is None:
            return []
        state_name = _get_enclosing_state_name(node)
        return [
            name
            for name in get_list_of_state_names_from_states_node(states_node, options.ignore_colon_offset)
            if name != state_name
        ]

    return []


def complete_state_names(node: Optional[AstNode], options: Optional[AslOptions] = None) -> List[str]:
    """
    Complete a state reference at the node under the cursor.

    The node is either the property itself (the value has not been typed yet) or the
    string value of the property.

    Returns:
        Candidate state names, empty when the node is not a state reference
    """
    if node is None:
        return []

    if is_property_node(node) and node.colon_offset >= 0:
        candidates = get_state_name_candidates(node, options)
        if candidates:
            return candidates

    if is_string_node(node) and is_property_node(node.parent) and node.parent.value_node is node:
        return get_state_name_candidates(node.parent, options)

    return []
