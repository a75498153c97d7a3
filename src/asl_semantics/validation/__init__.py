"""
Validation Module

This module provides the structural validator for ASL documents.

Available components:
- StateValidator / validate_states: Reachability, reference and schema checks per scope
- validate_properties: Property-schema conformance of a single state
- Diagnostic, DiagnosticCode, DiagnosticSeverity: Validation results
"""

from .diagnostics import Diagnostic, DiagnosticCode, DiagnosticFactory, DiagnosticSeverity
from .path_fields import is_intrinsic_function, is_json_path, validate_parameters
from .property_validator import get_diagnostics_for_node, validate_properties
from .state_validator import RootType, StateValidator, validate_states

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFactory",
    "DiagnosticSeverity",
    "RootType",
    "StateValidator",
    "get_diagnostics_for_node",
    "is_intrinsic_function",
    "is_json_path",
    "validate_parameters",
    "validate_properties",
    "validate_states",
]
