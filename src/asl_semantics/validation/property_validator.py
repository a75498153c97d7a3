"""
Property-schema conformance checks.

A schema part maps property names to either True (allowed, value not inspected) or a
nested schema part. Three composite entries reference named tables in "ReferenceTypes":

- "Fn:ArrayOf": the value is an array; every object item is checked against the table
- "Fn:OneOf": at most one property of the table may be present next to the regular ones
- "Fn:ValueOf": the same object is checked against the table instead
"""

from typing import Any, Dict, List, Optional

from ..document.ast_nodes import AstNode, ObjectNode, find_prop_child_by_name, is_array_node, is_object_node
from .diagnostics import Diagnostic, DiagnosticCode, DiagnosticFactory

ARRAY_OF = "Fn:ArrayOf"
ONE_OF = "Fn:OneOf"
VALUE_OF = "Fn:ValueOf"


def _get_diagnostics_for_array_of_schema(node: AstNode, factory: DiagnosticFactory, array_schema: str,
                                         reference_types: Dict[str, Any]) -> List[Diagnostic]:
    item_schema = reference_types.get(array_schema)
    diagnostics = []
    if isinstance(item_schema, dict):
        for item in node.items:
            if is_object_node(item):
                diagnostics.extend(get_diagnostics_for_node(item, factory, item_schema, reference_types))
    return diagnostics


def _get_diagnostics_for_one_of_schema(node: ObjectNode, factory: DiagnosticFactory, schema_part: Dict[str, Any],
                                       one_of_schema: str, reference_types: Dict[str, Any]) -> List[Diagnostic]:
    exclusive_properties = reference_types.get(one_of_schema) or {}
    present = []
    diagnostics = []

    for prop in node.properties:
        property_schema = exclusive_properties.get(prop.key)
        if property_schema:
            present.append((prop, property_schema))
        elif not schema_part.get(prop.key):
            diagnostics.append(factory.for_node(prop.key_node, DiagnosticCode.INVALID_PROPERTY_NAME))

    if len(present) > 1:
        for prop, _ in present:
            diagnostics.append(factory.for_node(prop.key_node, DiagnosticCode.MUTUALLY_EXCLUSIVE_CHOICE_PROPERTIES))
    elif present:
        prop, property_schema = present[0]
        if isinstance(property_schema, dict) and prop.value_node is not None:
            diagnostics.extend(get_diagnostics_for_node(prop.value_node, factory, property_schema, reference_types))

    return diagnostics


def _get_diagnostics_for_regular_properties(node: ObjectNode, factory: DiagnosticFactory, schema_part: Dict[str, Any],
                                            reference_types: Dict[str, Any]) -> List[Diagnostic]:
    if isinstance(schema_part.get("properties"), dict):
        schema_part = schema_part["properties"]

    diagnostics = []
    for prop in node.properties:
        property_schema = schema_part.get(prop.key)
        if not property_schema:
            diagnostics.append(factory.for_node(prop.key_node, DiagnosticCode.INVALID_PROPERTY_NAME))
        elif isinstance(property_schema, dict) and prop.value_node is not None:
            diagnostics.extend(get_diagnostics_for_node(prop.value_node, factory, property_schema, reference_types))
    return diagnostics


def get_diagnostics_for_node(node: AstNode, factory: DiagnosticFactory, schema_part: Dict[str, Any],
                             reference_types: Dict[str, Any]) -> List[Diagnostic]:
    """
    Check a node against a schema part.

    Args:
        node: Node to check (object or array)
        factory: Diagnostic factory bound to the document
        schema_part: Schema part describing the node
        reference_types: Named tables referenced by composite entries

    Returns:
        List of diagnostics, empty when the node conforms or its shape does not match the schema part
    """
    array_of_type = schema_part.get(ARRAY_OF)
    one_of_type = schema_part.get(ONE_OF)
    value_of_type = schema_part.get(VALUE_OF)

    # Fn:ArrayOf ignores every other entry of the schema part
    if isinstance(array_of_type, str) and is_array_node(node):
        return _get_diagnostics_for_array_of_schema(node, factory, array_of_type, reference_types)
    if isinstance(one_of_type, str) and is_object_node(node):
        return _get_diagnostics_for_one_of_schema(node, factory, schema_part, one_of_type, reference_types)
    if isinstance(value_of_type, str) and is_object_node(node):
        referenced_schema = reference_types.get(value_of_type)
        if isinstance(referenced_schema, dict):
            return get_diagnostics_for_node(node, factory, referenced_schema, reference_types)
        return []
    if is_object_node(node):
        return _get_diagnostics_for_regular_properties(node, factory, schema_part, reference_types)
    return []


def validate_properties(state_node: ObjectNode, factory: DiagnosticFactory, schema: Dict[str, Any]) -> List[Diagnostic]:
    """
    Check the properties of one state object.

    Common properties are accepted unless the state type opts out of them (Choice,
    Succeed and Fail list their own). Type-specific properties come from
    schema["StateTypes"][type]["Properties"] and are checked recursively when their
    entry is a nested schema part. A state without a known type only accepts the
    common properties.

    Args:
        state_node: Object node of the state definition
        factory: Diagnostic factory bound to the document
        schema: Full validation schema

    Returns:
        List of diagnostics for this state
    """
    type_prop = find_prop_child_by_name(state_node, "Type")
    type_name = type_prop.value if type_prop is not None else None
    state_types = schema.get("StateTypes", {})
    common = schema.get("Common", {})
    reference_types = schema.get("ReferenceTypes", {})

    type_schema: Optional[Dict[str, Any]] = None
    if isinstance(type_name, str):
        type_schema = state_types.get(type_name)
    has_common_properties = type_schema is None or type_schema.get("hasCommonProperties") is True

    diagnostics = []
    for prop in state_node.properties:
        if has_common_properties and common.get(prop.key):
            continue

        property_schema = (type_schema or {}).get("Properties", {}).get(prop.key)
        if property_schema:
            if isinstance(property_schema, dict) and prop.value_node is not None:
                diagnostics.extend(get_diagnostics_for_node(prop.value_node, factory, property_schema, reference_types))
            continue

        diagnostics.append(factory.for_node(prop.key_node, DiagnosticCode.INVALID_PROPERTY_NAME))

    return diagnostics
