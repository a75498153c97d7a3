"""
Graph Addressing & Visitor

Canonical path addressing for any state at any nesting depth, plus a depth-first
visitor with global early-stop semantics.

Paths are tuples whose segments are either state ids (str) or Parallel branch
indexes (int):
- ("A",)                      top-level state A
- ("MyMap", "Inner")          state Inner inside the sub-workflow of Map state MyMap
- ("MyParallel", 1, "Inner")  state Inner inside the second branch of MyParallel

State ids are unique only within their own "States" mapping, so a bare id is
ambiguous once Map/Parallel nesting is involved; the path is not.
"""

import re
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, Union

from .definitions import (
    get_processor_definition,
    is_asl_with_states,
    is_choice,
    is_error_handled,
    is_map,
    is_parallel,
    is_terminal,
)

# Nested scopes deeper than this are treated as absent
MAX_NESTING_DEPTH = 64

PathSegment = Union[str, int]
StatePath = Tuple[PathSegment, ...]
BranchPath = Tuple[PathSegment, ...]


class StateAddress(NamedTuple):
    """
    Location of a state inside a workflow.

    Attributes:
        state: The state definition
        parent: The workflow scope whose "States" mapping holds the state
        path: Full path to the state (ends with the state id)
        parent_path: Path to the enclosing scope (the top level is the empty tuple)
    """

    state: Optional[Dict[str, Any]]
    parent: Optional[Dict[str, Any]]
    path: Optional[StatePath]
    parent_path: Optional[BranchPath]


STATE_NOT_FOUND = StateAddress(state=None, parent=None, path=None, parent_path=None)


class VisitResult(Enum):
    CONTINUE = "continue"
    STOP = "stop"


StateVisitor = Callable[[str, Dict[str, Any], Dict[str, Any], StatePath], Union[VisitResult, bool, None]]


def _should_stop(result: Union[VisitResult, bool, None]) -> bool:
    """Visitors may answer with a VisitResult or a plain bool (False means stop)."""
    if isinstance(result, VisitResult):
        return result is VisitResult.STOP
    return result is False


def get_nested_scopes(state: Any, path: StatePath) -> List[Tuple[Dict[str, Any], BranchPath]]:
    """
    List the sub-workflows directly owned by a state.

    Args:
        state: State definition
        path: Path of the state itself

    Returns:
        List of (scope, scope_path) tuples: one for a Map processor, one per Parallel branch
    """
    scopes = []
    if is_map(state):
        processor = get_processor_definition(state)
        if isinstance(processor, dict):
            scopes.append((processor, tuple(path)))
    elif is_parallel(state):
        branches = state.get("Branches")
        if isinstance(branches, list):
            for branch_index, branch in enumerate(branches):
                if isinstance(branch, dict):
                    scopes.append((branch, tuple(path) + (branch_index,)))
    return scopes


def _visit_scope(scope: Dict[str, Any], partial_path: BranchPath, visitor: StateVisitor, depth: int) -> bool:
    """Returns False once the visitor asked to stop, which unwinds every enclosing frame."""
    if depth > MAX_NESTING_DEPTH or not is_asl_with_states(scope):
        return True

    for state_id, state in scope["States"].items():
        path = partial_path + (state_id,)
        if _should_stop(visitor(state_id, state, scope, path)):
            return False

        for nested_scope, nested_path in get_nested_scopes(state, path):
            if not _visit_scope(nested_scope, nested_path, visitor, depth + 1):
                return False

    return True


def visit_all_states(root: Dict[str, Any], visitor: StateVisitor) -> None:
    """
    Visit every state of a workflow in depth-first preorder.

    For each state the visitor is called as visitor(id, state, parent, path). Map
    sub-workflows are entered with the path extended by the Map id, Parallel branches
    with the path extended by (parallel_id, branch_index).

    When the visitor returns VisitResult.STOP (or False) the traversal stops globally:
    no further state is visited anywhere in the document.

    Args:
        root: Workflow definition
        visitor: Callback invoked once per state
    """
    _visit_scope(root, (), visitor, 0)


def _find_state_by_id(scope: Any, state_id: str, branch_path: BranchPath, depth: int) -> StateAddress:
    if depth > MAX_NESTING_DEPTH or not is_asl_with_states(scope):
        return STATE_NOT_FOUND

    states = scope["States"]
    if state_id in states:
        return StateAddress(
            state=states[state_id],
            parent=scope,
            path=branch_path + (state_id,),
            parent_path=branch_path,
        )

    for child_id, child_state in states.items():
        for nested_scope, nested_path in get_nested_scopes(child_state, branch_path + (child_id,)):
            result = _find_state_by_id(nested_scope, state_id, nested_path, depth + 1)
            if result.state is not None:
                return result

    return STATE_NOT_FOUND


def find_state_by_id(root: Dict[str, Any], state_id: str, branch_path: BranchPath = ()) -> StateAddress:
    """
    Find the first state whose key equals state_id.

    The current "States" mapping is searched first, then every Map sub-workflow and
    Parallel branch in mapping order, depth first.

    Args:
        root: Workflow definition (or nested scope) to search
        state_id: State id to look for
        branch_path: Path of root itself when it is a nested scope

    Returns:
        StateAddress of the state, or STATE_NOT_FOUND when no state has this id
    """
    return _find_state_by_id(root, state_id, tuple(branch_path), 0)


def find_state_by_path(root: Dict[str, Any], path: StatePath) -> StateAddress:
    """
    Resolve an exact state path.

    Args:
        root: Workflow definition
        path: Path ending in a state id

    Returns:
        StateAddress of the addressed state, or STATE_NOT_FOUND when any segment does not resolve
    """
    path = tuple(path)
    if not path or not isinstance(path[-1], str) or len(path) > MAX_NESTING_DEPTH * 2:
        return STATE_NOT_FOUND

    scope = root
    index = 0
    while index < len(path) - 1:
        if not is_asl_with_states(scope):
            return STATE_NOT_FOUND
        owner = scope["States"].get(path[index])
        if is_map(owner):
            scope = get_processor_definition(owner)
            index += 1
        elif is_parallel(owner) and index + 1 < len(path) and isinstance(path[index + 1], int):
            branches = owner.get("Branches")
            branch_index = path[index + 1]
            if not isinstance(branches, list) or not 0 <= branch_index < len(branches):
                return STATE_NOT_FOUND
            scope = branches[branch_index]
            index += 2
        else:
            return STATE_NOT_FOUND

    if not is_asl_with_states(scope) or path[-1] not in scope["States"]:
        return STATE_NOT_FOUND

    return StateAddress(
        state=scope["States"][path[-1]],
        parent=scope,
        path=path,
        parent_path=path[:-1],
    )


def get_all_children(root: Dict[str, Any], state_id: str) -> List[str]:
    """
    Return every descendant state id of a state, at any depth.

    The order is the preorder used by visit_all_states.
    """
    address = find_state_by_id(root, state_id)
    if address.state is None:
        return []

    children = []

    def collect(child_id, child_state, parent, path):
        children.append(child_id)
        return VisitResult.CONTINUE

    for nested_scope, nested_path in get_nested_scopes(address.state, address.path):
        _visit_scope(nested_scope, nested_path, collect, len(address.path))
    return children


def get_direct_next(state: Dict[str, Any]) -> Optional[str]:
    """
    Return the single forward edge used for basic chaining.

    Terminal states have none. A Choice state answers with its Default, falling back to
    the first rule's Next. Every other state answers with its Next. Catch targets and
    additional Choice rules are not included; use get_next_state_ids for the full edge set.
    """
    if is_terminal(state):
        return None

    if is_choice(state):
        if state.get("Default"):
            return state["Default"]
        choices = state.get("Choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            return choices[0].get("Next") or None
        return None

    return state.get("Next") or None


def get_next_state_ids(state: Any) -> List[str]:
    """
    Return every forward edge of a state in declaration order, without duplicates.

    Edges are the state's Next, the Default and every rule Next of a Choice state, and
    every Catch rule Next of a Task, Map or Parallel state. Non-string targets are ignored.

    Args:
        state: State definition

    Returns:
        List of target state ids
    """
    targets = []

    def add(target):
        if isinstance(target, str) and target not in targets:
            targets.append(target)

    if not isinstance(state, dict):
        return targets

    add(state.get("Next"))

    if is_choice(state):
        choices = state.get("Choices")
        if isinstance(choices, list):
            for rule in choices:
                if isinstance(rule, dict):
                    add(rule.get("Next"))
        add(state.get("Default"))

    catchers = state.get("Catch") if is_error_handled(state) else None
    if isinstance(catchers, list):
        for catcher in catchers:
            if isinstance(catcher, dict):
                add(catcher.get("Next"))

    return targets


def get_all_state_ids(root: Dict[str, Any]) -> List[str]:
    result = []

    def collect(state_id, state, parent, path):
        result.append(state_id)
        return VisitResult.CONTINUE

    visit_all_states(root, collect)
    return result


def is_parallel_branch(path: Optional[BranchPath]) -> bool:
    """A branch path addresses a Parallel branch when it ends with a branch index."""
    return path is not None and len(path) > 1 and isinstance(path[-1], int)


def get_state_id_from_branch_path(path: BranchPath) -> Optional[str]:
    """Return the last state id segment of a path (the owner of a branch path)."""
    for segment in reversed(tuple(path)):
        if isinstance(segment, str):
            return segment
    return None


def get_branch_index(branch_name: str) -> Optional[int]:
    """
    Parse a branch label such as "Branches[3]".

    Returns:
        The branch index, or None when the label does not match
    """
    match = re.match(r"^Branches\[(\d+)\]$", branch_name)
    if match:
        return int(match.group(1))
    return None
