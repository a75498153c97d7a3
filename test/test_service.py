"""
Tests for service.py
"""

from unittest.mock import patch

import pytest

from asl_semantics.document.loader import YAML_LANGUAGE_ID, DocumentLoader, load_document
from asl_semantics.options import AslOptions
from asl_semantics.service import AslLanguageService
from asl_semantics.validation.diagnostics import DiagnosticCode

WORKFLOW_JSON = """{
  "StartAt": "Prepare",
  "States": {
    "Prepare": {"Type": "Pass", "Assign": {"orderId": "$.id"}, "Next": "Charge"},
    "Charge": {
      "Type": "Task",
      "Resource": "arn:aws:states:::lambda:invoke",
      "Arguments": {"Order": "$"},
      "Next": "Done"
    },
    "Done": {"Type": "Succeed"}
  }
}"""

MISSING_SEPARATOR = '{"StartAt": "A", "States": {"A": {"Type": "Pass", "Next": "B"}, "B", "C": {"Type": "Succeed"}}}'


@pytest.fixture
def service():
    return AslLanguageService()


@pytest.fixture
def document():
    return load_document(WORKFLOW_JSON)


class TestAslOptions:
    """Test cases for AslOptions"""

    def test_yaml_forces_ignore_colon_offset(self):
        """Test that YAML documents always ignore the colon offset"""
        assert AslOptions().for_language(is_yaml=True).ignore_colon_offset is True
        assert AslOptions().for_language(is_yaml=False).ignore_colon_offset is False

    def test_explicit_option_kept(self):
        """Test that an explicit setting is kept for JSON"""
        options = AslOptions(ignore_colon_offset=True)

        assert options.for_language(is_yaml=False) is options


class TestDoValidation:
    """Test cases for AslLanguageService.do_validation"""

    def test_valid_document(self, service, document):
        """Test that a correct workflow has no diagnostics"""
        assert service.do_validation(document) == []

    def test_invalid_reference(self, service):
        """Test that reference errors are reported"""
        document = load_document('{"StartAt": "Nope", "States": {"A": {"Type": "Succeed"}}}')

        codes = [d.code for d in service.do_validation(document)]

        assert codes == [DiagnosticCode.INVALID_START_AT, DiagnosticCode.UNREACHABLE_STATE]

    def test_non_object_root(self, service):
        """Test that a document whose root is not an object is not validated"""
        assert service.do_validation(load_document("[1, 2]")) == []

    def test_json_respects_colon_offset(self, service):
        """Test that a JSON declaration without separator is not a state"""
        codes = [d.code for d in service.do_validation(load_document(MISSING_SEPARATOR))]

        assert codes == [DiagnosticCode.INVALID_NEXT, DiagnosticCode.UNREACHABLE_STATE]

    def test_yaml_ignores_colon_offset(self, service):
        """Test that a YAML declaration without separator still counts as a state"""
        document = load_document(MISSING_SEPARATOR, YAML_LANGUAGE_ID)

        codes = [d.code for d in service.do_validation(document)]

        assert codes == [DiagnosticCode.UNREACHABLE_STATE]


class TestVariableScope:
    """Test cases for AslLanguageService.get_variable_scope"""

    def test_scope_of_state(self, service, document):
        """Test that the predecessor's Assign is in the local scope"""
        scope = service.get_variable_scope(document, "Charge")

        assert scope.local_scope == {"orderId": None}
        assert scope.outer_scope == {}

    def test_resolver_rebuilt_per_version(self, service, document):
        """Test that the reverse adjacency is rebuilt only for a new document version"""
        with patch.object(service.resolver, "rebuild", wraps=service.resolver.rebuild) as mock_rebuild:
            service.get_variable_scope(document, "Charge")
            service.get_variable_scope(document, "Done")
            assert mock_rebuild.call_count == 1

            edited = DocumentLoader(use_colors=False).load_document_from_string(WORKFLOW_JSON, version=1)["document"]
            service.get_variable_scope(edited, "Charge")
            assert mock_rebuild.call_count == 2


class TestCompletion:
    """Test cases for the completion entry points"""

    def test_complete_state_names(self, service, document):
        """Test state name candidates for a Next value"""
        offset = document.text.index('"Next": "Charge"') + len('"Next": "')

        assert service.complete_state_names(document, offset) == ["Charge", "Done"]

    def test_complete_variables(self, service, document):
        """Test variable candidates inside Arguments"""
        offset = document.text.index('"$"') + 1

        result = service.complete_variables(document, offset)

        assert result["parent_path"] == ""
        assert result["items"] == ["$orderId", "$states"]

    def test_complete_variables_outside_document(self, service, document):
        """Test that an offset past the document has no candidates"""
        assert service.complete_variables(document, len(document.text) + 10) is None
