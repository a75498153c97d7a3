"""
Variable Scope Resolver

Computes which "Assign" variables are guaranteed to be bound when a state starts:

- local_scope: variables assigned by states that execute before the target in the same scope
- outer_scope: variables inherited from the scopes enclosing the target's Map or Parallel state

The local scope comes from a backward walk over the reverse adjacency. Each visited
predecessor contributes only the Assign attached to the edge that was followed, so a
Choice rule or Catch rule counts only for the state it routes to. Visited edges are
tracked as (predecessor, successor) pairs, which makes manual loops terminate.

The outer scope repeats the computation one level up, with the owning Map/Parallel state
as the new target. Sub-workflows of a Distributed Map run isolated and inherit nothing.
Only the key shape of the assigned values is kept.
"""

import logging
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union

from ..asl.definitions import (
    JSON_EDITING_PROPERTY,
    is_choice,
    is_distributed_mode,
    is_error_handled,
    is_map,
    is_with_variables,
)
from ..asl.graph import (
    STATE_NOT_FOUND,
    StateAddress,
    StatePath,
    find_state_by_id,
    find_state_by_path,
)
from .previous_states import PreviousStatesMap, build_previous_states_map, get_previous_states

logger = logging.getLogger(__name__)

StateReference = Union[str, StatePath]


class VariableCompletionList(NamedTuple):
    """Variables in scope at a state, as nested key trees without values."""

    local_scope: Dict[str, Any]
    outer_scope: Dict[str, Any]


def _empty_completion_list() -> VariableCompletionList:
    return VariableCompletionList(local_scope={}, outer_scope={})


def merge_variables(base: Any, other: Any) -> Any:
    """
    Deep-merge two key trees without mutating either.

    Objects merge per key and arrays merge per index. When the shapes disagree the
    value merged later wins.
    """
    if isinstance(base, dict) and isinstance(other, dict):
        merged = dict(base)
        for key, value in other.items():
            merged[key] = merge_variables(merged[key], value) if key in merged else value
        return merged

    if isinstance(base, list) and isinstance(other, list):
        merged_items = [merge_variables(base_item, other_item) for base_item, other_item in zip(base, other)]
        longer = base if len(base) > len(other) else other
        return merged_items + list(longer[len(merged_items):])

    return other


def get_json_keys(value: Any) -> Any:
    """Keep the structure of a JSON value and drop its primitives (they become None)."""
    if isinstance(value, list):
        return [get_json_keys(item) for item in value]
    if isinstance(value, dict):
        return {key: get_json_keys(item) for key, item in value.items()}
    return None


def get_assign_keys(assign: Any) -> Dict[str, Any]:
    """
    Reduce an Assign block to its key tree.

    The editing sentinel property is dropped at the top level.

    Args:
        assign: Value of an "Assign" field

    Returns:
        Key tree, empty when the block is not an object
    """
    if not isinstance(assign, dict):
        return {}
    return {key: get_json_keys(value) for key, value in assign.items() if key != JSON_EDITING_PROPERTY}


def get_assign_variables(state: Dict[str, Any], next_state_id: str) -> Dict[str, Any]:
    """
    Collect the variables a state binds on its way to a specific successor.

    - Catch rules count when their Next is the successor
    - For a Choice state, rules count when their Next is the successor and the state's
      own Assign counts when its Default is the successor
    - For any other state, its own Assign counts when its Next is the successor

    Args:
        state: Predecessor state definition
        next_state_id: The successor reached through the edge

    Returns:
        Key tree of the variables bound along that edge
    """
    variables: Dict[str, Any] = {}

    if is_error_handled(state) and isinstance(state.get("Catch"), list):
        for catcher in state["Catch"]:
            if isinstance(catcher, dict) and catcher.get("Assign") and catcher.get("Next") == next_state_id:
                variables = merge_variables(variables, get_assign_keys(catcher["Assign"]))

    if is_choice(state):
        if isinstance(state.get("Choices"), list):
            for rule in state["Choices"]:
                if isinstance(rule, dict) and rule.get("Assign") and rule.get("Next") == next_state_id:
                    variables = merge_variables(variables, get_assign_keys(rule["Assign"]))
        if state.get("Default") == next_state_id and state.get("Assign"):
            variables = merge_variables(variables, get_assign_keys(state["Assign"]))
    elif state.get("Next") == next_state_id and state.get("Assign"):
        variables = merge_variables(variables, get_assign_keys(state["Assign"]))

    return variables


def _get_owner_path(address: StateAddress) -> Optional[StatePath]:
    """Path of the Map or Parallel state owning the scope of an address."""
    scope_path = address.parent_path
    if not scope_path:
        return None
    if isinstance(scope_path[-1], int):
        scope_path = scope_path[:-1]
    return scope_path or None


def _resolve(asl: Dict[str, Any], address: StateAddress, previous_states: PreviousStatesMap,
             from_sub_workflow: bool) -> VariableCompletionList:
    completion_list = _empty_completion_list()
    current_id = address.path[-1]

    # Item executions of a Distributed Map never observe their parent's variables
    if from_sub_workflow and is_map(address.state) and is_distributed_mode(address.state):
        return completion_list

    local_scope: Dict[str, Any] = {}
    scope_states = address.parent["States"]
    visited = set()
    states_to_explore: List[Tuple[str, str]] = [
        (state_id, current_id) for state_id in get_previous_states(previous_states, address.parent_path, current_id)
    ]

    while states_to_explore:
        state_id, next_state_id = states_to_explore.pop()
        if (state_id, next_state_id) in visited:
            continue

        state = scope_states.get(state_id)
        if not is_with_variables(state):
            continue
        visited.add((state_id, next_state_id))

        # A Map/Parallel state's own Assign is bound after its sub-workflows finish
        if not (from_sub_workflow and state_id == current_id):
            local_scope = merge_variables(local_scope, get_assign_variables(state, next_state_id))

        states_to_explore.extend(
            (previous_id, state_id)
            for previous_id in get_previous_states(previous_states, address.parent_path, state_id)
        )

    outer_scope: Dict[str, Any] = {}
    owner_path = _get_owner_path(address)
    if owner_path is not None:
        owner_address = find_state_by_path(asl, owner_path)
        if owner_address.state is not None:
            parent_variables = _resolve(asl, owner_address, previous_states, from_sub_workflow=True)
            outer_scope = merge_variables(parent_variables.local_scope, parent_variables.outer_scope)

    return VariableCompletionList(local_scope=local_scope, outer_scope=outer_scope)


def _locate(asl: Dict[str, Any], reference: StateReference) -> StateAddress:
    if isinstance(reference, (tuple, list)):
        return find_state_by_path(asl, tuple(reference))
    if isinstance(reference, str):
        return find_state_by_id(asl, reference)
    return STATE_NOT_FOUND


def get_assign_completion_list(asl: Dict[str, Any], target: StateReference, current: Optional[StateReference] = None,
                               previous_states: Optional[PreviousStatesMap] = None) -> VariableCompletionList:
    """
    Compute the variables in scope when a state starts.

    Args:
        asl: Workflow definition
        target: State id (first match in search order) or exact state path
        current: Where the search starts. Defaults to the target; when it names the Map or
            Parallel state enclosing the target, the result is the scope seen from inside
            that state's sub-workflow
        previous_states: Reverse adjacency of asl, built on demand when omitted

    Returns:
        VariableCompletionList; both scopes are empty when the state does not exist
    """
    if previous_states is None:
        previous_states = build_previous_states_map(asl)

    target_address = _locate(asl, target)
    current_address = target_address if current is None else _locate(asl, current)
    if target_address.state is None or current_address.state is None:
        return _empty_completion_list()

    from_sub_workflow = current_address.path != target_address.path
    logger.debug("Resolving variable scope of %s from %s", target_address.path, current_address.path)
    return _resolve(asl, current_address, previous_states, from_sub_workflow)


class VariableScopeResolver:
    """
    Holds the reverse adjacency of one document version.

    rebuild() computes the new map completely before publishing it with a single
    assignment, so a concurrent lookup sees either the old or the new snapshot.
    """

    def __init__(self, asl: Optional[Dict[str, Any]] = None):
        self._snapshot: Tuple[Dict[str, Any], PreviousStatesMap] = ({}, {})
        if asl is not None:
            self.rebuild(asl)

    @property
    def asl(self) -> Dict[str, Any]:
        return self._snapshot[0]

    @property
    def previous_states(self) -> PreviousStatesMap:
        return self._snapshot[1]

    def rebuild(self, asl: Dict[str, Any]) -> None:
        """Replace the snapshot with the reverse adjacency of a new document version."""
        previous_states = build_previous_states_map(asl)
        self._snapshot = (asl, previous_states)

    def get_variable_scope(self, target: StateReference, current: Optional[StateReference] = None) -> VariableCompletionList:
        asl, previous_states = self._snapshot
        return get_assign_completion_list(asl, target, current, previous_states)
