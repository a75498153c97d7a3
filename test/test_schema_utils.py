"""
Tests for data_schema/utils.py
"""

import json
from unittest.mock import mock_open, patch

import pytest

from asl_semantics.data_schema.utils import get_diagnostic_messages, get_validation_schema
from asl_semantics.validation.diagnostics import DiagnosticCode


class TestGetValidationSchema:
    """Test get_validation_schema function."""

    def test_packaged_schema(self):
        """Test the packaged schema has every table the validator reads."""
        schema = get_validation_schema()

        for table in ("Common", "StateTypes", "ReferenceTypes", "Root", "NestedMapRoot", "NestedParallelRoot"):
            assert table in schema
        assert schema["StateTypes"]["Task"]["hasCommonProperties"] is True
        assert "hasCommonProperties" not in schema["StateTypes"]["Choice"]
        assert schema["NestedMapRoot"]["ProcessorConfig"] is True
        assert "ProcessorConfig" not in schema["NestedParallelRoot"]

    def test_mocked_schema(self):
        """Test the schema file content is returned as is."""
        mock_schema = {"Common": {"Type": True}, "StateTypes": {}}

        with patch("builtins.open", mock_open(read_data=json.dumps(mock_schema))):
            result = get_validation_schema()

        assert result == mock_schema

    def test_json_decode_error(self):
        """Test handling of JSON decode error in the schema file."""
        with patch("builtins.open", mock_open(read_data='{"invalid": json content}')):
            with pytest.raises(json.JSONDecodeError):
                get_validation_schema()

    def test_file_not_found(self):
        """Test handling of file not found error."""
        with patch("builtins.open", side_effect=FileNotFoundError("File not found")):
            with pytest.raises(FileNotFoundError):
                get_validation_schema()


class TestGetDiagnosticMessages:
    """Test get_diagnostic_messages function."""

    def test_every_code_has_a_message(self):
        """Test the catalog covers every diagnostic code."""
        messages = get_diagnostic_messages()

        for code in DiagnosticCode:
            assert messages[code.value]

    def test_message_text(self):
        """Test representative message texts."""
        messages = get_diagnostic_messages()

        assert messages["INVALID_PROPERTY_NAME"] == "Field is not supported."
        assert messages["INVALID_NEXT"] == 'The value of "Next" property must be the name of an existing state.'
