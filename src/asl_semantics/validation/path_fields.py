"""
Checks for fields whose value is a JSONPath or an intrinsic function call.

Inside payload templates (Parameters, ResultSelector, ItemSelector) a key ending in ".$"
marks a dynamic value: it must be a JSONPath ("$...") or an intrinsic function such as
"States.Format('{}', $.name)". Fail states accept ErrorPath/CausePath only when they
resolve to a string.
"""

import re
from typing import List, Optional

from ..document.ast_nodes import PropertyNode, find_prop_child_by_name, is_object_node
from .diagnostics import Diagnostic, DiagnosticCode, DiagnosticFactory

INTRINSIC_FUNCTIONS = (
    "Array",
    "ArrayPartition",
    "ArrayContains",
    "ArrayRange",
    "ArrayGetItem",
    "ArrayLength",
    "ArrayUnique",
    "Base64Encode",
    "Base64Decode",
    "Hash",
    "JsonMerge",
    "StringToJson",
    "JsonToString",
    "MathRandom",
    "MathAdd",
    "StringSplit",
    "UUID",
    "Format",
)

STRING_INTRINSIC_FUNCTIONS = (
    "Format",
    "JsonToString",
    "ArrayGetItem",
    "Base64Encode",
    "Base64Decode",
    "Hash",
    "UUID",
)

DYNAMIC_KEY_SUFFIX = ".$"

_INTRINSIC_FUNCTION_REGEX = re.compile(r"^States\.(%s)\(.*\)$" % "|".join(INTRINSIC_FUNCTIONS), re.DOTALL)
_STRING_INTRINSIC_FUNCTION_REGEX = re.compile(r"^States\.(%s)\(.*\)$" % "|".join(STRING_INTRINSIC_FUNCTIONS), re.DOTALL)


def is_json_path(text: str) -> bool:
    return text.startswith("$")


def is_intrinsic_function(text: str) -> bool:
    return bool(_INTRINSIC_FUNCTION_REGEX.match(text.rstrip()))


def is_string_intrinsic_function(text: str) -> bool:
    return bool(_STRING_INTRINSIC_FUNCTION_REGEX.match(text.rstrip()))


def validate_parameters(parameters_prop: Optional[PropertyNode], factory: DiagnosticFactory) -> List[Diagnostic]:
    """
    Check the dynamic keys of a payload template, recursing into nested objects.

    Args:
        parameters_prop: The Parameters / ResultSelector / ItemSelector property node
        factory: Diagnostic factory bound to the document

    Returns:
        One INVALID_JSON_PATH_OR_INTRINSIC diagnostic per offending value
    """
    if parameters_prop is None or not is_object_node(parameters_prop.value_node):
        return []

    diagnostics = []
    for prop in parameters_prop.value_node.properties:
        if prop.value_node is None:
            continue
        if prop.key.endswith(DYNAMIC_KEY_SUFFIX):
            value = prop.value_node.value
            if not isinstance(value, str) or not (is_json_path(value) or is_intrinsic_function(value)):
                diagnostics.append(factory.for_node(prop.value_node, DiagnosticCode.INVALID_JSON_PATH_OR_INTRINSIC))
        elif is_object_node(prop.value_node):
            diagnostics.extend(validate_parameters(prop, factory))
    return diagnostics


def validate_fail_paths(state_node, factory: DiagnosticFactory) -> List[Diagnostic]:
    """ErrorPath and CausePath of a Fail state must yield a string."""
    diagnostics = []
    for field_name in ("ErrorPath", "CausePath"):
        prop = find_prop_child_by_name(state_node, field_name)
        if prop is None or prop.value_node is None:
            continue
        value = prop.value_node.value
        if not isinstance(value, str) or not (is_json_path(value) or is_string_intrinsic_function(value)):
            diagnostics.append(factory.for_node(prop.value_node, DiagnosticCode.INVALID_JSON_PATH_OR_INTRINSIC_STRING_ONLY))
    return diagnostics
