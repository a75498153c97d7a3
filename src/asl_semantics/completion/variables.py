"""
Variable Completion

Suggests "$variable" names for fields that accept variable references. The candidates
are the Assign variables in scope at the enclosing state (see scope.resolver) merged
with the reserved "$states" variables that fit the field:

- $states.input and $states.context everywhere
- $states.context.Map.Item inside a Map's ItemSelector
- $states.errorOutput inside a Catch rule
- $states.result in success fields of Task, Map and Parallel states
"""

import copy
import re
from typing import Any, Dict, List, Optional

from ..asl.definitions import StateType
from ..document.ast_nodes import AstNode, find_closest_ancestor_node_by_name, get_state_info
from ..scope.previous_states import PreviousStatesMap
from ..scope.resolver import VariableCompletionList, get_assign_completion_list, merge_variables

VARIABLE_PREFIX = "$"
VARIABLE_TRANSFORM_KEY_SUFFIX = ".$"

CONTEXT_OBJECT_KEYS = {
    "Execution": {
        "Id": None,
        "Input": None,
        "Name": None,
        "RoleArn": None,
        "StartTime": None,
        "RedriveCount": None,
        "RedriveTime": None,
    },
    "State": {
        "EnteredTime": None,
        "Name": None,
        "RetryCount": None,
    },
    "StateMachine": {
        "Id": None,
        "Name": None,
    },
    "Task": {
        "Token": None,
    },
}

MAP_STATE_CONTEXT = {"Map": {"Item": {"Index": None, "Value": None}}}

RESERVED_VARIABLES = {"states": {"input": None, "context": CONTEXT_OBJECT_KEYS}}
RESERVED_VARIABLES_ERROR = {"states": {"errorOutput": None}}
RESERVED_VARIABLES_SUCCESS = {"states": {"result": None}}

FIELDS_INPUT = ("Parameters", "InputPath", "Arguments")
FIELDS_SUCCESS = ("Output", "Assign", "ResultSelector", "OutputPath")
FIELDS_FAIL = ("Catch",)
FIELDS_MAP = ("ItemSelector",)
FIELDS_WITH_VARIABLES = FIELDS_INPUT + FIELDS_SUCCESS + FIELDS_FAIL + FIELDS_MAP

_STATES_WITH_RESULT = (StateType.MAP.value, StateType.TASK.value, StateType.PARALLEL.value)
_PATH_SEGMENT = re.compile(r"([^.\[\]]+)|\[(\d+)\]")


def get_reserved_variables(is_error: bool = False, is_success: bool = False, is_item_selector: bool = False,
                           state_type: str = StateType.TASK.value) -> Dict[str, Any]:
    """
    Reserved variable keys available in a field.

    Args:
        is_error: The field is inside a Catch rule
        is_success: The field is evaluated after the state succeeded
        is_item_selector: The field is a Map's ItemSelector
        state_type: Type of the enclosing state

    Returns:
        Key tree rooted at "states"
    """
    reserved = copy.deepcopy(RESERVED_VARIABLES)

    if is_item_selector:
        reserved["states"]["context"] = merge_variables(reserved["states"]["context"], MAP_STATE_CONTEXT)

    if is_error:
        reserved = merge_variables(reserved, RESERVED_VARIABLES_ERROR)
    elif is_success and state_type in _STATES_WITH_RESULT:
        reserved = merge_variables(reserved, RESERVED_VARIABLES_SUCCESS)

    return reserved


def _get_by_path(tree: Any, path: str) -> Any:
    """Follow a dotted path with optional [index] segments, None when it does not resolve."""
    current = tree
    for key, index in _PATH_SEGMENT.findall(path):
        if index:
            if not isinstance(current, list) or int(index) >= len(current):
                return None
            current = current[int(index)]
        else:
            if not isinstance(current, dict) or key not in current:
                return None
            current = current[key]
    return current


def get_completion_strings(node_value: str, completion_scope: VariableCompletionList,
                           reserved_variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Turn a partially typed variable reference into candidate key names.

    Everything up to the last "." is the parent path; the candidates are the keys of
    the variable tree at that path. Top-level candidates carry the "$" prefix, nested
    ones do not. A trailing ".$" on a key is dropped.

    Args:
        node_value: Text typed so far, such as "$outerObject.nes"
        completion_scope: Local and outer variable scopes
        reserved_variables: Reserved key tree, see get_reserved_variables

    Returns:
        Dict containing:
        - parent_path: Path of the object whose keys are suggested ("" at the top level)
        - items: Candidate names
    """
    object_path = node_value.replace(VARIABLE_PREFIX, "", 1).split(".")
    parent_path = ".".join(object_path[:-1])
    variable_prefix = "" if len(object_path) > 1 else VARIABLE_PREFIX

    all_variables = merge_variables(completion_scope.outer_scope or {}, completion_scope.local_scope or {})
    all_variables = merge_variables(all_variables, reserved_variables if reserved_variables is not None else get_reserved_variables())

    scope = _get_by_path(all_variables, parent_path) if parent_path else all_variables
    items: List[str] = []
    if isinstance(scope, dict):
        for variable in scope:
            items.append(f"{variable_prefix}{variable.replace(VARIABLE_TRANSFORM_KEY_SUFFIX, '', 1)}")

    return {"parent_path": parent_path, "items": items}


def get_variable_completions(node: AstNode, asl: Dict[str, Any], value: Optional[str] = None,
                             previous_states: Optional[PreviousStatesMap] = None) -> Optional[Dict[str, Any]]:
    """
    Variable candidates for the node under the cursor.

    Args:
        node: Node under the cursor
        asl: Workflow definition of the document
        value: Text typed so far; defaults to the node's own string value
        previous_states: Reverse adjacency of asl, built on demand when omitted

    Returns:
        Dict with "parent_path" and "items" as in get_completion_strings, or None when
        the node is outside a state or outside every field that accepts variables
    """
    state_info = get_state_info(node)
    if state_info is None:
        return None

    field_node = find_closest_ancestor_node_by_name(node, FIELDS_WITH_VARIABLES)
    if field_node is None:
        return None

    is_error = find_closest_ancestor_node_by_name(node, FIELDS_FAIL) is not None
    state_type = state_info["type"] if isinstance(state_info["type"], str) else StateType.TASK.value
    reserved = get_reserved_variables(
        is_error=is_error,
        is_success=not is_error and field_node.key in FIELDS_SUCCESS,
        is_item_selector=field_node.key in FIELDS_MAP,
        state_type=state_type,
    )

    state_path = state_info["path"]
    completion_scope = get_assign_completion_list(asl, state_path, state_path, previous_states)

    if value is None:
        value = node.value if isinstance(node.value, str) else ""
    return get_completion_strings(value, completion_scope, reserved)
