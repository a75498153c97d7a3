"""
Shared workflow fixtures for the variable scope and completion tests.
"""

import copy

import pytest


def get_map_asl(mode):
    return {
        "Comment": "Assign variable with map states",
        "StartAt": "Pass_Parent",
        "States": {
            "Pass_Parent": {"Type": "Pass", "Next": "Map", "Assign": {"var_parent": 1}},
            "Map": {
                "Type": "Map",
                "Iterator": {
                    "StartAt": "Pass_SubWorkflow1",
                    "States": {
                        "Pass_SubWorkflow1": {"Type": "Pass", "Next": "Pass_SubWorkflow2", "Assign": {"var_sub1": 1}},
                        "Pass_SubWorkflow2": {"Type": "Pass", "End": True, "Assign": {"var_sub2": 1}},
                    },
                    "ProcessorConfig": {"Mode": mode, "ExecutionType": "STANDARD"},
                },
                "End": True,
                "ItemsPath": "$",
                "MaxConcurrency": 5,
                "Assign": {"var_map": "map params"},
            },
        },
    }


LOCAL_SCOPE_ASL = {
    "Comment": "A description of my state machine",
    "StartAt": "Pass_BeforeLambda",
    "States": {
        "Pass_BeforeLambda": {
            "Type": "Pass",
            "Next": "Lambda",
            "Assign": {
                "ValueEnteredInForm": '{\n "brancOne2.$": "$.branch1",\n}',
                "var_pass_before": 1,
                "var_nested": {"array": [{"key1": 123}], "object": {"nestedObjectKey": 1}},
            },
        },
        "Lambda": {
            "Type": "Task",
            "Resource": "arn:aws:states:::lambda:invoke",
            "OutputPath": "$.Payload",
            "Parameters": {"Payload.$": "$"},
            "Assign": {"var_lambda_pass": 1},
            "Next": "Pass_Success",
            "Catch": [{"ErrorEquals": [], "Next": "Pass_ErrorFallback", "Assign": {"var_lambda_error": 1}}],
        },
        "Pass_Success": {"Type": "Pass", "Assign": {"var_pass_success": 1}, "Next": "Pass_End"},
        "Pass_ErrorFallback": {"Type": "Pass", "Next": "Pass_End", "Assign": {"var_pass_error": 1}},
        "Pass_End": {"Type": "Pass", "Next": "Success", "Assign": {"var_pass_end": 1}},
        "Success": {"Type": "Succeed"},
    },
}

PARALLEL_ASL = {
    "Comment": "A description of my parallel state machine",
    "StartAt": "Pass_Parent",
    "States": {
        "Pass_Parent": {"Type": "Pass", "Next": "Parallel", "Assign": {"var_parent": 1}},
        "Parallel": {
            "Type": "Parallel",
            "Branches": [
                {
                    "StartAt": "Branch2-1",
                    "States": {"Branch2-1": {"Type": "Pass", "Assign": {"var_branch2_1": 1}, "End": True}},
                },
                {
                    "StartAt": "Branch1-1",
                    "States": {
                        "Branch1-1": {
                            "Type": "Task",
                            "Resource": "arn:aws:states:::lambda:invoke",
                            "Parameters": {"Payload.$": "$"},
                            "Assign": {"var_branch1_1": 1},
                            "Next": "Branch1-2",
                        },
                        "Branch1-2": {"Type": "Pass", "Assign": {"var_branch1_2": 1}, "End": True},
                    },
                },
            ],
            "End": True,
            "Assign": {"var_parallel": 1},
        },
    },
}

CHOICE_ASL = {
    "Comment": "A description of my state machine",
    "StartAt": "Pass_Before_Choice",
    "States": {
        "Pass_Parent": {"Type": "Pass", "Next": "Choice", "Assign": {"var_pass_before": 1}},
        "Choice": {
            "Type": "Choice",
            "Choices": [{"Next": "Rule1-1", "Assign": {"var_rule1": 1}}],
            "Default": "Rule-default-1",
            "Assign": {"var_rule_default": 1},
        },
        "Rule1-1": {
            "Type": "Task",
            "Resource": "arn:aws:states:::lambda:invoke",
            "Parameters": {"Payload.$": "$"},
            "Assign": {"var_branch_1": 1},
            "Next": "Rule1-2",
        },
        "Rule1-2": {"Type": "Pass", "Assign": {"var_branch_2": 1}, "End": True},
        "Rule-default-1": {"Type": "Pass", "Assign": {"var_default_1": 1}, "End": True},
    },
}

MANUAL_LOOP_ASL = {
    "Comment": "A description of my state machine",
    "StartAt": "Wait_BeforeLoop",
    "States": {
        "Wait_BeforeLoop": {
            "Type": "Wait",
            "Seconds": 5,
            "Next": "Pass_Before_Choice",
            "Assign": {"var_before_loop": 1},
        },
        "Pass_Before_Choice": {"Type": "Pass", "Next": "Choice", "Assign": {"var_pass_before": "$"}},
        "Choice": {
            "Type": "Choice",
            "Choices": [{"Next": "Rule1-1", "Assign": {"var_rule1": 1}}],
            "Default": "Rule-default-1",
            "Assign": {"var_rule_default": 1},
        },
        "Rule1-1": {
            "Type": "Task",
            "Resource": "arn:aws:states:::lambda:invoke",
            "Parameters": {"Payload.$": "$"},
            "Assign": {"var_branch_1": 1},
            "Next": "Rule1-2",
        },
        "Rule1-2": {"Type": "Pass", "Assign": {"var_branch_2": 1}, "End": True},
        "Rule-default-1": {"Type": "Pass", "Assign": {"var_default_1": 1}, "Next": "Pass_Before_Choice"},
    },
}


@pytest.fixture
def map_asl():
    """Factory for a Map workflow with the given processor mode."""
    return get_map_asl


@pytest.fixture
def local_scope_asl():
    return copy.deepcopy(LOCAL_SCOPE_ASL)


@pytest.fixture
def parallel_asl():
    return copy.deepcopy(PARALLEL_ASL)


@pytest.fixture
def choice_asl():
    return copy.deepcopy(CHOICE_ASL)


@pytest.fixture
def manual_loop_asl():
    return copy.deepcopy(MANUAL_LOOP_ASL)
