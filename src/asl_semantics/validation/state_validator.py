"""
Reachability & Structural Validator

This module validates one workflow scope at a time and recurses into every Map
sub-workflow and Parallel branch. For each scope it:

1. Checks the scope's own properties against the root schema of its kind
2. Checks StartAt, every Next, Default, Choice rule Next and Catch rule Next against
   the sibling state names
3. Checks each state's properties against the property schema
4. Reports states no edge reaches and scopes with no terminal state

Problems in the document become diagnostics; nothing here raises on bad input.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from ..asl.definitions import StateType, get_processor_field_name, get_item_selector_field_name
from ..asl.graph import MAX_NESTING_DEPTH
from ..data_schema import get_validation_schema
from ..document.ast_nodes import (
    ObjectNode,
    PropertyNode,
    find_prop_child_by_name,
    get_list_of_state_names_from_states_node,
    is_array_node,
    is_object_node,
)
from ..document.loader import AslDocument
from .diagnostics import Diagnostic, DiagnosticCode, DiagnosticFactory
from .path_fields import validate_fail_paths, validate_parameters
from .property_validator import validate_properties

logger = logging.getLogger(__name__)

_WITH_PARAMETERS = (StateType.PASS.value, StateType.TASK.value, StateType.PARALLEL.value)
_WITH_ERROR_HANDLING = (StateType.TASK.value, StateType.PARALLEL.value, StateType.MAP.value)


class RootType(Enum):
    """Kind of scope being validated; selects the root schema table."""

    ROOT = "Root"
    MAP = "NestedMapRoot"
    PARALLEL = "NestedParallelRoot"


class StateValidator:
    """
    Validates the states of an ASL document.

    Attributes:
        document: Document the diagnostics point into
        schema: Property-schema tables (see data_schema/validation_schema.json)
        ignore_colon_offset: Count state declarations that lack a key/value separator
    """

    def __init__(self, document: AslDocument, schema: Optional[Dict[str, Any]] = None,
                 ignore_colon_offset: bool = False, messages: Optional[Dict[str, str]] = None):
        self.document = document
        self.schema = schema if schema is not None else get_validation_schema()
        self.ignore_colon_offset = ignore_colon_offset
        self.factory = DiagnosticFactory(document, messages)

    def validate(self, root_node: Optional[ObjectNode] = None, root_type: RootType = RootType.ROOT) -> List[Diagnostic]:
        """
        Validate a scope and every scope nested in it.

        Args:
            root_node: Object node of the scope, defaults to the document root
            root_type: Kind of the scope

        Returns:
            Ordered list of diagnostics
        """
        if root_node is None:
            root_node = self.document.root
        if not is_object_node(root_node):
            return []
        return self._validate_scope(root_node, root_type, 0)

    def _reference_diagnostic(self, prop: Optional[PropertyNode], state_names: List[str],
                              code: DiagnosticCode) -> Optional[Diagnostic]:
        """A reference is invalid when its value is not one of the sibling state names."""
        if prop is None or prop.value_node is None:
            return None
        if prop.value_node.value in state_names:
            return None
        return self.factory.for_node(prop.value_node, code)

    def _validate_array_next(self, array_prop_name: str, state_node: ObjectNode, state_names: List[str],
                             reached: Set[str]) -> List[Diagnostic]:
        """Validate the Next of every rule in an array property (Catch, Choices)."""
        diagnostics = []
        array_prop = find_prop_child_by_name(state_node, array_prop_name)
        if array_prop is None or not is_array_node(array_prop.value_node):
            return diagnostics

        for item in array_prop.value_node.items:
            if not is_object_node(item):
                continue
            next_prop = find_prop_child_by_name(item, "Next")
            if next_prop is None:
                continue
            diagnostic = self._reference_diagnostic(next_prop, state_names, DiagnosticCode.INVALID_NEXT)
            if diagnostic:
                diagnostics.append(diagnostic)
            elif isinstance(next_prop.value, str):
                reached.add(next_prop.value)
        return diagnostics

    def _validate_root_properties(self, root_node: ObjectNode, root_type: RootType) -> List[Diagnostic]:
        root_schema = self.schema.get(root_type.value, {})
        return [
            self.factory.for_node(prop.key_node, DiagnosticCode.INVALID_PROPERTY_NAME)
            for prop in root_node.properties
            if not root_schema.get(prop.key)
        ]

    def _validate_scope(self, root_node: ObjectNode, root_type: RootType, depth: int) -> List[Diagnostic]:
        if depth > MAX_NESTING_DEPTH:
            return []

        diagnostics = self._validate_root_properties(root_node, root_type)

        states_prop = find_prop_child_by_name(root_node, "States")
        if states_prop is None:
            return diagnostics

        state_names = get_list_of_state_names_from_states_node(states_prop, self.ignore_colon_offset)
        start_at_prop = find_prop_child_by_name(root_node, "StartAt")
        start_at_diagnostic = self._reference_diagnostic(start_at_prop, state_names, DiagnosticCode.INVALID_START_AT)
        if start_at_diagnostic:
            diagnostics.append(start_at_diagnostic)

        if not is_object_node(states_prop.value_node):
            return diagnostics

        reached: Set[str] = set()
        if start_at_prop is not None and isinstance(start_at_prop.value, str):
            reached.add(start_at_prop.value)

        has_terminal_state = False
        declared_states: List[PropertyNode] = []

        for state_prop in states_prop.value_node.properties:
            state_node = state_prop.value_node
            if not is_object_node(state_node):
                continue
            declared_states.append(state_prop)
            diagnostics.extend(validate_properties(state_node, self.factory, self.schema))

            type_prop = find_prop_child_by_name(state_node, "Type")
            state_type = type_prop.value if type_prop is not None else None
            next_prop = find_prop_child_by_name(state_node, "Next")
            end_prop = find_prop_child_by_name(state_node, "End")

            if end_prop is not None and end_prop.value is True:
                has_terminal_state = True

            if next_prop is not None and isinstance(next_prop.value, str):
                reached.add(next_prop.value)

            if state_type in _WITH_PARAMETERS:
                diagnostics.extend(validate_parameters(find_prop_child_by_name(state_node, "Parameters"), self.factory))

            if state_type in _WITH_ERROR_HANDLING:
                diagnostics.extend(self._validate_array_next("Catch", state_node, state_names, reached))
                diagnostics.extend(validate_parameters(find_prop_child_by_name(state_node, "ResultSelector"), self.factory))

            if state_type == StateType.MAP.value:
                diagnostics.extend(self._validate_map(state_node, depth))
            elif state_type == StateType.PARALLEL.value:
                diagnostics.extend(self._validate_parallel(state_node, depth))
            elif state_type == StateType.CHOICE.value:
                default_prop = find_prop_child_by_name(state_node, "Default")
                default_diagnostic = self._reference_diagnostic(default_prop, state_names, DiagnosticCode.INVALID_DEFAULT)
                if default_diagnostic:
                    diagnostics.append(default_diagnostic)
                elif default_prop is not None and isinstance(default_prop.value, str):
                    reached.add(default_prop.value)
                diagnostics.extend(self._validate_array_next("Choices", state_node, state_names, reached))
            elif state_type == StateType.SUCCEED.value:
                has_terminal_state = True
            elif state_type == StateType.FAIL.value:
                has_terminal_state = True
                diagnostics.extend(validate_fail_paths(state_node, self.factory))

            next_diagnostic = self._reference_diagnostic(next_prop, state_names, DiagnosticCode.INVALID_NEXT)
            if next_diagnostic:
                diagnostics.append(next_diagnostic)

        if not has_terminal_state:
            diagnostics.append(self.factory.for_node(states_prop.key_node, DiagnosticCode.NO_TERMINAL_STATE))

        for state_prop in declared_states:
            if state_prop.key not in reached:
                diagnostics.append(self.factory.for_node(state_prop.key_node, DiagnosticCode.UNREACHABLE_STATE))

        logger.debug("Validated scope with %d states at depth %d: %d diagnostics",
                     len(declared_states), depth, len(diagnostics))
        return diagnostics

    def _validate_map(self, state_node: ObjectNode, depth: int) -> List[Diagnostic]:
        state_value = state_node.value
        diagnostics = validate_parameters(
            find_prop_child_by_name(state_node, get_item_selector_field_name(state_value)), self.factory
        )

        processor_prop = find_prop_child_by_name(state_node, get_processor_field_name(state_value))
        if processor_prop is not None and is_object_node(processor_prop.value_node):
            diagnostics.extend(self._validate_scope(processor_prop.value_node, RootType.MAP, depth + 1))
        return diagnostics

    def _validate_parallel(self, state_node: ObjectNode, depth: int) -> List[Diagnostic]:
        diagnostics = []
        branches_prop = find_prop_child_by_name(state_node, "Branches")
        if branches_prop is None or not is_array_node(branches_prop.value_node):
            return diagnostics

        for branch in branches_prop.value_node.items:
            if is_object_node(branch):
                diagnostics.extend(self._validate_scope(branch, RootType.PARALLEL, depth + 1))
        return diagnostics


def validate_states(root_node: ObjectNode, document: AslDocument, root_type: RootType = RootType.ROOT,
                    schema: Optional[Dict[str, Any]] = None, ignore_colon_offset: bool = False) -> List[Diagnostic]:
    """
    Validate a workflow scope and all of its nested scopes.

    Args:
        root_node: Object node of the scope
        document: Document the node belongs to
        root_type: Kind of the scope (top level, Map sub-workflow or Parallel branch)
        schema: Property-schema tables, defaults to the packaged schema
        ignore_colon_offset: Count state declarations that lack a key/value separator

    Returns:
        Ordered list of diagnostics
    """
    validator = StateValidator(document, schema=schema, ignore_colon_offset=ignore_colon_offset)
    return validator.validate(root_node, root_type)
