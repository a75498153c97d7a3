"""
State Graph Model

This module describes the shape of an Amazon States Language (ASL) workflow as plain
Python values (dicts and lists decoded from JSON/YAML) and provides the type predicates
and accessors used by the rest of the package.

A workflow is a tree of graphs:
- Each scope is a mapping with "StartAt" and "States"
- Map states own one nested scope ("ItemProcessor", or the legacy "Iterator")
- Parallel states own an ordered list of nested scopes ("Branches")

Two generations of the Map schema name the same concepts differently. The accessors
get_processor_definition / get_item_selector_definition return the canonical value, and
the *_field_name accessors return the literal field present so callers can write back
in the document's own vocabulary.
"""

from enum import Enum
from typing import Any, Dict, Optional

JSON_EDITING_PROPERTY = "ValueEnteredInForm"


class StateType(str, Enum):
    """Closed set of state kinds, keyed by the "Type" discriminator."""

    PASS = "Pass"
    WAIT = "Wait"
    TASK = "Task"
    SUCCEED = "Succeed"
    FAIL = "Fail"
    CHOICE = "Choice"
    MAP = "Map"
    PARALLEL = "Parallel"
    PLACEHOLDER = "Placeholder"


class MapProcessingMode(str, Enum):
    """Execution modes of a Map state's item processor."""

    DISTRIBUTED = "DISTRIBUTED"
    INLINE = "INLINE"


class QueryLanguage(str, Enum):
    JSONPATH = "JSONPath"
    JSONATA = "JSONata"


def get_state_type(state: Any) -> Optional[StateType]:
    """
    Classify a state by its "Type" field.

    Args:
        state: State definition (any value is accepted)

    Returns:
        The matching StateType, or None when the value is not a state or its type is unknown
    """
    if not isinstance(state, dict):
        return None
    try:
        return StateType(state.get("Type"))
    except ValueError:
        return None


def is_pass(state: Any) -> bool:
    return get_state_type(state) is StateType.PASS


def is_wait(state: Any) -> bool:
    return get_state_type(state) is StateType.WAIT


def is_task(state: Any) -> bool:
    return get_state_type(state) is StateType.TASK


def is_succeed(state: Any) -> bool:
    return get_state_type(state) is StateType.SUCCEED


def is_fail(state: Any) -> bool:
    return get_state_type(state) is StateType.FAIL


def is_choice(state: Any) -> bool:
    return get_state_type(state) is StateType.CHOICE


def is_map(state: Any) -> bool:
    return get_state_type(state) is StateType.MAP


def is_parallel(state: Any) -> bool:
    return get_state_type(state) is StateType.PARALLEL


def is_placeholder(state: Any) -> bool:
    return get_state_type(state) is StateType.PLACEHOLDER


def is_terminal(state: Any) -> bool:
    """Succeed and Fail end their scope and carry no forward edge."""
    return get_state_type(state) in (StateType.SUCCEED, StateType.FAIL)


def is_valid_state_type(state: Any) -> bool:
    return get_state_type(state) is not None


def is_error_handled(state: Any) -> bool:
    """States that may declare Catch and Retry rules."""
    return get_state_type(state) in (StateType.TASK, StateType.MAP, StateType.PARALLEL)


def is_with_variables(state: Any) -> bool:
    """States that may declare an "Assign" block."""
    return get_state_type(state) in (
        StateType.PASS,
        StateType.WAIT,
        StateType.TASK,
        StateType.CHOICE,
        StateType.MAP,
        StateType.PARALLEL,
    )


def is_asl_with_states(asl: Any) -> bool:
    """Check that a workflow value carries a "States" mapping (not a list)."""
    return isinstance(asl, dict) and isinstance(asl.get("States"), dict)


def is_choice_with_choices(state: Any) -> bool:
    return is_choice(state) and isinstance(state.get("Choices"), list)


def is_parallel_with_branches(state: Any) -> bool:
    return is_parallel(state) and isinstance(state.get("Branches"), list)


def is_map_with_processor(state: Any) -> bool:
    return is_map(state) and isinstance(get_processor_definition(state), dict)


def get_processor_definition(map_state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Get the sub-workflow of a Map state regardless of the schema generation.

    Args:
        map_state: Map state definition

    Returns:
        The "ItemProcessor" value when present, otherwise the legacy "Iterator" value
    """
    if "ItemProcessor" in map_state:
        return map_state["ItemProcessor"]
    return map_state.get("Iterator")


def get_processor_field_name(map_state: Dict[str, Any]) -> str:
    """Return the literal field name holding the value get_processor_definition returns."""
    if "ItemProcessor" not in map_state and "Iterator" in map_state:
        return "Iterator"
    return "ItemProcessor"


def get_item_selector_definition(map_state: Dict[str, Any]) -> Any:
    """
    Get the item-selection template of a Map state regardless of the schema generation.

    Args:
        map_state: Map state definition

    Returns:
        The legacy "Parameters" value when present, otherwise the "ItemSelector" value
    """
    if "Parameters" in map_state:
        return map_state["Parameters"]
    return map_state.get("ItemSelector")


def get_item_selector_field_name(map_state: Dict[str, Any]) -> str:
    if "Parameters" in map_state:
        return "Parameters"
    return "ItemSelector"


def get_processor_mode(map_state: Dict[str, Any]) -> Optional[str]:
    processor = get_processor_definition(map_state)
    if not isinstance(processor, dict):
        return None
    processor_config = processor.get("ProcessorConfig")
    if not isinstance(processor_config, dict):
        return None
    return processor_config.get("Mode")


def is_distributed_mode(map_state: Dict[str, Any]) -> bool:
    """A Map runs distributed only when its processor config says so explicitly."""
    return get_processor_mode(map_state) == MapProcessingMode.DISTRIBUTED.value


def is_inline_map(map_state: Dict[str, Any]) -> bool:
    mode = get_processor_mode(map_state)
    return mode is None or mode == MapProcessingMode.INLINE.value
