"""
Schema utilities for ASL Semantics.

This module provides centralized access to the JSON configuration shipped with the package,
including the property-schema tables used by the validator and the diagnostic message catalog.
"""

import json
from pathlib import Path
from typing import Any, Dict


def get_validation_schema() -> Dict[str, Any]:
    """
    Get the property-schema tables used for structural validation.

    Returns:
        Dict[str, Any]: The validation schema dictionary with the Common, StateTypes,
        ReferenceTypes and root tables.
    """
    _schema_dir = Path(__file__).parent
    schema_path = _schema_dir / "validation_schema.json"
    with open(schema_path, "r", encoding="utf-8") as f:
        _schema = json.load(f)
    return _schema


def get_diagnostic_messages() -> Dict[str, str]:
    """
    Get the diagnostic message catalog.

    Returns:
        Dict[str, str]: Mapping of diagnostic code name to message text.
    """
    _schema_dir = Path(__file__).parent
    messages_path = _schema_dir / "diagnostic_messages.json"
    with open(messages_path, "r", encoding="utf-8") as f:
        _messages = json.load(f)
    return _messages
