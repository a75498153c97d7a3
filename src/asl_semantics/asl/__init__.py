"""
ASL Module

This module provides the state graph model of an Amazon States Language workflow
and the addressing primitives built on it.

Available components:
- definitions: State kinds, type predicates and Map field-name normalization
- graph: Path addressing, state lookup and the depth-first visitor
"""

from .definitions import (
    JSON_EDITING_PROPERTY,
    MapProcessingMode,
    StateType,
    get_item_selector_definition,
    get_item_selector_field_name,
    get_processor_definition,
    get_processor_field_name,
    get_state_type,
    is_distributed_mode,
    is_inline_map,
    is_terminal,
    is_with_variables,
)
from .graph import (
    MAX_NESTING_DEPTH,
    STATE_NOT_FOUND,
    StateAddress,
    VisitResult,
    find_state_by_id,
    find_state_by_path,
    get_all_children,
    get_all_state_ids,
    get_branch_index,
    get_direct_next,
    get_next_state_ids,
    get_state_id_from_branch_path,
    is_parallel_branch,
    visit_all_states,
)

__all__ = [
    "JSON_EDITING_PROPERTY",
    "MapProcessingMode",
    "StateType",
    "get_item_selector_definition",
    "get_item_selector_field_name",
    "get_processor_definition",
    "get_processor_field_name",
    "get_state_type",
    "is_distributed_mode",
    "is_inline_map",
    "is_terminal",
    "is_with_variables",
    "MAX_NESTING_DEPTH",
    "STATE_NOT_FOUND",
    "StateAddress",
    "VisitResult",
    "find_state_by_id",
    "find_state_by_path",
    "get_all_children",
    "get_all_state_ids",
    "get_branch_index",
    "get_direct_next",
    "get_next_state_ids",
    "get_state_id_from_branch_path",
    "is_parallel_branch",
    "visit_all_states",
]
