"""
Remote Module

This module cross-checks documents with the AWS Step Functions service.

Available components:
- StepFunctionsDefinitionValidator: ValidateStateMachineDefinition with diagnostics mapped onto the document
- find_node_by_pointer: JSON-pointer lookup in the syntax tree
"""

from .sfn_validator import StepFunctionsDefinitionValidator, find_node_by_pointer

__all__ = ["StepFunctionsDefinitionValidator", "find_node_by_pointer"]
