"""
Completion Module

This module computes completion candidates for ASL documents.

Available components:
- complete_state_names: State names for StartAt, Next and Default
- get_variable_completions: Assign and reserved "$states" variables in scope
- get_completion_strings: Candidate keys for a partially typed variable path
"""

from .state_names import complete_state_names, get_state_name_candidates
from .variables import (
    RESERVED_VARIABLES,
    get_completion_strings,
    get_reserved_variables,
    get_variable_completions,
)

__all__ = [
    "complete_state_names",
    "get_state_name_candidates",
    "RESERVED_VARIABLES",
    "get_completion_strings",
    "get_reserved_variables",
    "get_variable_completions",
]
