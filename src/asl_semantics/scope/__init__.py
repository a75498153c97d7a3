"""
Scope Module

This module resolves which Assign variables are in scope at a given state.

Available components:
- build_previous_states_map: Reverse adjacency keyed per scope
- get_assign_completion_list: Local and outer variable scopes of a state
- VariableScopeResolver: Per-document snapshot with rebuild-and-swap
"""

from .previous_states import PreviousStatesMap, build_previous_states_map
from .resolver import (
    VariableCompletionList,
    VariableScopeResolver,
    get_assign_completion_list,
    get_assign_keys,
    get_assign_variables,
    merge_variables,
)

__all__ = [
    "PreviousStatesMap",
    "build_previous_states_map",
    "VariableCompletionList",
    "VariableScopeResolver",
    "get_assign_completion_list",
    "get_assign_keys",
    "get_assign_variables",
    "merge_variables",
]
