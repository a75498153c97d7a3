"""
Data schema package for ASL Semantics.

This package provides centralized access to the JSON configuration used throughout the application.
"""

from .utils import get_diagnostic_messages, get_validation_schema

__all__ = ["get_diagnostic_messages", "get_validation_schema"]
