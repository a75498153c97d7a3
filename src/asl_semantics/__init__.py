"""
ASL Semantics

Semantic analysis for Amazon States Language workflow definitions, written in JSON
or YAML.

Main Components:
- asl: State graph model, path addressing and the depth-first visitor.
- document: Position-annotated syntax tree and the JSON/YAML loader.
- validation: Reference, reachability and property-schema diagnostics.
- scope: Assign variables in scope at a state.
- completion: State name and variable completion candidates.
- remote: Cross-check with the AWS Step Functions validation API.
- reporting: Terminal rendering of diagnostics and variable scopes.

Usage:
    from asl_semantics import AslLanguageService, load_document

    document = load_document(text, "json")
    diagnostics = AslLanguageService().do_validation(document)
"""

# Version information
__version__ = "1.0.0"
__author__ = "ASL Semantics Team"
__description__ = "Semantic analysis engine for Amazon States Language"

from .analyzer_main import AnalyzerMainInterface
from .asl import StateAddress, VisitResult, find_state_by_id, find_state_by_path, visit_all_states
from .completion import complete_state_names, get_completion_strings, get_variable_completions
from .data_schema import get_diagnostic_messages, get_validation_schema
from .document import AslDocument, DocumentLoader, load_document
from .options import AslOptions
from .remote import StepFunctionsDefinitionValidator
from .reporting import DiagnosticsReporter, ScopeVisualizer
from .scope import VariableCompletionList, VariableScopeResolver, get_assign_completion_list
from .service import AslLanguageService
from .validation import Diagnostic, DiagnosticCode, DiagnosticSeverity, RootType, validate_states

__all__ = [
    # Package metadata
    "__version__",
    "__author__",
    "__description__",
    # Main interface
    "AnalyzerMainInterface",
    "AslLanguageService",
    "AslOptions",
    # Graph model
    "StateAddress",
    "VisitResult",
    "find_state_by_id",
    "find_state_by_path",
    "visit_all_states",
    # Documents
    "AslDocument",
    "DocumentLoader",
    "load_document",
    # Validation
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSeverity",
    "RootType",
    "validate_states",
    "StepFunctionsDefinitionValidator",
    # Variable scopes and completion
    "VariableCompletionList",
    "VariableScopeResolver",
    "get_assign_completion_list",
    "complete_state_names",
    "get_completion_strings",
    "get_variable_completions",
    # Reporting
    "DiagnosticsReporter",
    "ScopeVisualizer",
    # Data Schema
    "get_diagnostic_messages",
    "get_validation_schema",
]

# Package-level configuration
import logging

# Set up package-level logging
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())  # Prevent "No handlers" warnings


def get_package_info():
    """Get information about the package and available components."""
    info = {
        "version": __version__,
        "author": __author__,
        "description": __description__,
        "public_api": __all__,
    }
    return info
