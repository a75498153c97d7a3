"""
Tests for validation/state_validator.py
"""

import json

import pytest

from asl_semantics.document.ast_nodes import find_prop_child_by_name
from asl_semantics.document.loader import Position, load_document
from asl_semantics.validation.diagnostics import DiagnosticCode, DiagnosticSeverity
from asl_semantics.validation.state_validator import RootType, StateValidator, validate_states


def _validate(asl, **kwargs):
    text = asl if isinstance(asl, str) else json.dumps(asl, indent=2)
    document = load_document(text)
    return document, validate_states(document.root, document, **kwargs)


def _codes(diagnostics):
    return [d.code for d in diagnostics]


def _flagged(document, diagnostics):
    return [document.text[document.offset_at(d.range.start):document.offset_at(d.range.end)] for d in diagnostics]


class TestReferences:
    """Test StartAt, Next and Default references."""

    def test_valid_workflow(self):
        """Test a correct workflow has no diagnostics."""
        _, diagnostics = _validate({
            "Comment": "ok",
            "StartAt": "A",
            "States": {"A": {"Type": "Pass", "Next": "B"}, "B": {"Type": "Succeed"}},
        })
        assert diagnostics == []

    def test_invalid_next(self):
        """Test a Next to a missing state, which also leaves B unreachable."""
        document, diagnostics = _validate({
            "StartAt": "A",
            "States": {"A": {"Type": "Pass", "Next": "C"}, "B": {"Type": "Succeed"}},
        })

        assert _codes(diagnostics) == [DiagnosticCode.INVALID_NEXT, DiagnosticCode.UNREACHABLE_STATE]
        assert _flagged(document, diagnostics) == ['"C"', '"B"']
        assert all(d.severity == DiagnosticSeverity.ERROR for d in diagnostics)

    def test_invalid_start_at(self):
        """Test a StartAt to a missing state."""
        document, diagnostics = _validate({
            "StartAt": "X",
            "States": {"A": {"Type": "Pass", "Next": "B"}, "B": {"Type": "Succeed"}},
        })

        assert _codes(diagnostics) == [DiagnosticCode.INVALID_START_AT, DiagnosticCode.UNREACHABLE_STATE]
        assert _flagged(document, diagnostics) == ['"X"', '"A"']

    def test_diagnostic_position(self):
        """Test diagnostics carry line and character positions."""
        document, diagnostics = _validate({"StartAt": "Missing", "States": {"A": {"Type": "Succeed"}}})

        start_at = find_prop_child_by_name(document.root, "StartAt")
        assert diagnostics[0].range.start == document.position_at(start_at.value_node.offset)
        assert diagnostics[0].range.start == Position(1, 13)

    def test_choice_references(self):
        """Test Default and rule Next references of a Choice state."""
        document, diagnostics = _validate({
            "StartAt": "C",
            "States": {
                "C": {
                    "Type": "Choice",
                    "Choices": [{"Variable": "$.x", "IsPresent": True, "Next": "Yes"}, {"Not": {"Variable": "$.y", "IsNull": True}, "Next": "Nope"}],
                    "Default": "Missing",
                },
                "Yes": {"Type": "Succeed"},
            },
        })

        assert _codes(diagnostics) == [DiagnosticCode.INVALID_DEFAULT, DiagnosticCode.INVALID_NEXT]
        assert _flagged(document, diagnostics) == ['"Missing"', '"Nope"']

    def test_catch_references(self):
        """Test Catch rules reference states and make them reachable."""
        document, diagnostics = _validate({
            "StartAt": "T",
            "States": {
                "T": {
                    "Type": "Task",
                    "Resource": "arn:aws:lambda:us-east-1:123456789012:function:f",
                    "Catch": [
                        {"ErrorEquals": ["States.Timeout"], "Next": "Fallback"},
                        {"ErrorEquals": ["States.ALL"], "Next": "Gone"},
                    ],
                    "End": True,
                },
                "Fallback": {"Type": "Fail", "Error": "Failed"},
            },
        })

        assert _codes(diagnostics) == [DiagnosticCode.INVALID_NEXT]
        assert _flagged(document, diagnostics) == ['"Gone"']


class TestReachability:
    """Test unreachable states and terminal states."""

    def test_no_terminal_state(self):
        """Test a scope that loops forever is reported at its States key."""
        document, diagnostics = _validate({"StartAt": "A", "States": {"A": {"Type": "Pass", "Next": "A"}}})

        assert _codes(diagnostics) == [DiagnosticCode.NO_TERMINAL_STATE]
        assert _flagged(document, diagnostics) == ['"States"']

    def test_end_counts_as_terminal(self):
        """Test End: true makes a state terminal, End: false does not."""
        _, diagnostics = _validate({"StartAt": "A", "States": {"A": {"Type": "Pass", "End": True}}})
        assert diagnostics == []

        _, diagnostics = _validate({"StartAt": "A", "States": {"A": {"Type": "Pass", "End": False}}})
        assert _codes(diagnostics) == [DiagnosticCode.NO_TERMINAL_STATE]

    def test_unreachable_after_scan(self):
        """Test a state referenced only by a later state is still reachable."""
        _, diagnostics = _validate({
            "StartAt": "A",
            "States": {"B": {"Type": "Succeed"}, "A": {"Type": "Pass", "Next": "B"}},
        })
        assert diagnostics == []

    def test_unreachable_cycle(self):
        """Test states reachable only from each other are still referenced."""
        document, diagnostics = _validate({
            "StartAt": "A",
            "States": {
                "A": {"Type": "Succeed"},
                "B": {"Type": "Pass", "Next": "C"},
                "C": {"Type": "Pass", "Next": "B"},
            },
        })
        assert diagnostics == []

    def test_non_object_states_skipped(self):
        """Test declarations whose value is not an object are neither checked nor reported."""
        _, diagnostics = _validate('{"StartAt": "A", "States": {"A": {"Type": "Succeed"}, "B": "oops"}}')
        assert diagnostics == []

    def test_empty_document(self):
        """Test documents without an object root produce nothing."""
        document = load_document("[]")
        assert StateValidator(document).validate() == []


class TestNestedScopes:
    """Test Map sub-workflows and Parallel branches."""

    def test_nested_scopes_are_isolated(self):
        """Test references resolve within their own scope only."""
        document, diagnostics = _validate({
            "StartAt": "M",
            "States": {
                "M": {
                    "Type": "Map",
                    "ItemProcessor": {
                        "ProcessorConfig": {"Mode": "INLINE"},
                        "StartAt": "Inner",
                        "States": {"Inner": {"Type": "Pass", "Next": "After"}},
                    },
                    "Next": "After",
                },
                "After": {"Type": "Succeed"},
            },
        })

        assert _codes(diagnostics) == [DiagnosticCode.INVALID_NEXT, DiagnosticCode.NO_TERMINAL_STATE]
        assert _flagged(document, diagnostics)[0] == '"After"'

    def test_legacy_iterator(self):
        """Test the legacy Iterator field is validated as a Map sub-workflow."""
        _, diagnostics = _validate({
            "StartAt": "M",
            "States": {
                "M": {
                    "Type": "Map",
                    "Parameters": {"item.$": "$$.Map.Item.Value"},
                    "Iterator": {"StartAt": "Inner", "States": {"Inner": {"Type": "Pass", "Next": "Missing"}}},
                    "End": True,
                },
            },
        })

        assert _codes(diagnostics) == [DiagnosticCode.INVALID_NEXT, DiagnosticCode.NO_TERMINAL_STATE]

    def test_item_processor_wins_over_iterator(self):
        """Test only the ItemProcessor scope is validated when both fields are present."""
        _, diagnostics = _validate({
            "StartAt": "M",
            "States": {
                "M": {
                    "Type": "Map",
                    "ItemProcessor": {"StartAt": "A", "States": {"A": {"Type": "Pass", "End": True}}},
                    "Iterator": {"StartAt": "B", "States": {"B": {"Type": "Pass", "Next": "Nope"}}},
                    "End": True,
                },
            },
        })

        assert diagnostics == []

    def test_root_properties_by_scope_kind(self):
        """Test ProcessorConfig is accepted in a Map sub-workflow but not in a branch."""
        document, diagnostics = _validate({
            "StartAt": "P",
            "Foo": 1,
            "States": {
                "P": {
                    "Type": "Parallel",
                    "Branches": [
                        {"StartAt": "B", "ProcessorConfig": {}, "States": {"B": {"Type": "Succeed"}}},
                    ],
                    "End": True,
                },
            },
        })

        assert _codes(diagnostics) == [DiagnosticCode.INVALID_PROPERTY_NAME] * 2
        assert _flagged(document, diagnostics) == ['"Foo"', '"ProcessorConfig"']

    def test_nested_root_type(self):
        """Test validating a nested scope directly with its root type."""
        document = load_document('{"StartAt": "B", "ProcessorConfig": {}, "States": {"B": {"Type": "Succeed"}}}')

        assert validate_states(document.root, document, RootType.MAP) == []
        assert _codes(validate_states(document.root, document, RootType.PARALLEL)) == [DiagnosticCode.INVALID_PROPERTY_NAME]

    def test_duplicate_names_across_scopes(self):
        """Test the same state name in two branches."""
        _, diagnostics = _validate({
            "StartAt": "P",
            "States": {
                "P": {
                    "Type": "Parallel",
                    "Branches": [
                        {"StartAt": "Step", "States": {"Step": {"Type": "Succeed"}}},
                        {"StartAt": "Step", "States": {"Step": {"Type": "Pass", "End": True}}},
                    ],
                    "Next": "Step",
                },
                "Step": {"Type": "Succeed"},
            },
        })
        assert diagnostics == []


class TestPayloadFields:
    """Test dynamic payload fields and Fail paths."""

    def test_parameters_and_result_selector(self):
        """Test Parameters and ResultSelector dynamic values."""
        document, diagnostics = _validate({
            "StartAt": "T",
            "States": {
                "T": {
                    "Type": "Task",
                    "Resource": "arn",
                    "Parameters": {"a.$": "not a path"},
                    "ResultSelector": {"b.$": "$.Payload", "c.$": "States.Nope()"},
                    "End": True,
                },
            },
        })

        assert _codes(diagnostics) == [DiagnosticCode.INVALID_JSON_PATH_OR_INTRINSIC] * 2
        assert _flagged(document, diagnostics) == ['"not a path"', '"States.Nope()"']

    def test_map_item_selector(self):
        """Test a Map's ItemSelector dynamic values."""
        _, diagnostics = _validate({
            "StartAt": "M",
            "States": {
                "M": {
                    "Type": "Map",
                    "ItemSelector": {"value.$": "Map.Item.Value"},
                    "ItemProcessor": {"StartAt": "I", "States": {"I": {"Type": "Succeed"}}},
                    "End": True,
                },
            },
        })
        assert _codes(diagnostics) == [DiagnosticCode.INVALID_JSON_PATH_OR_INTRINSIC]

    def test_fail_paths(self):
        """Test Fail ErrorPath must return a string."""
        _, diagnostics = _validate({
            "StartAt": "F",
            "States": {"F": {"Type": "Fail", "ErrorPath": "States.ArrayLength($.a)"}},
        })
        assert _codes(diagnostics) == [DiagnosticCode.INVALID_JSON_PATH_OR_INTRINSIC_STRING_ONLY]


class TestColonOffset:
    """Test state declarations that lack a key/value separator."""

    TEXT = '{"StartAt": "A", "States": {"A": {"Type": "Pass", "Next": "B"}, "B", "C": {"Type": "Succeed"}}}'

    def test_without_separator(self):
        """Test a declaration without a colon is not a state by default."""
        document, diagnostics = _validate(self.TEXT)
        assert _codes(diagnostics) == [DiagnosticCode.INVALID_NEXT, DiagnosticCode.UNREACHABLE_STATE]

    def test_ignore_colon_offset(self):
        """Test the declaration counts when the colon offset is ignored."""
        _, diagnostics = _validate(self.TEXT, ignore_colon_offset=True)
        assert _codes(diagnostics) == [DiagnosticCode.UNREACHABLE_STATE]
