"""
Tests for the reporting package
"""

from unittest.mock import patch

import pytest

from asl_semantics.document.loader import Position, Range
from asl_semantics.reporting import Colors, DiagnosticsReporter, ScopeVisualizer
from asl_semantics.scope.resolver import VariableCompletionList
from asl_semantics.validation.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSeverity


def _diagnostic(line, character, message="msg", code=DiagnosticCode.INVALID_NEXT,
                severity=DiagnosticSeverity.ERROR, source="asl"):
    position = Position(line, character)
    return Diagnostic(range=Range(position, position), message=message, code=code, severity=severity, source=source)


@pytest.fixture
def reporter():
    return DiagnosticsReporter(use_colors=False, use_icons=False)


@pytest.fixture
def visualizer():
    return ScopeVisualizer(use_colors=False, use_icons=False)


class TestDiagnosticsReporter:
    """Test cases for DiagnosticsReporter"""

    def test_format_diagnostic(self, reporter):
        """Test the single-line format with a 1-based location"""
        line = reporter.format_diagnostic(_diagnostic(3, 14, "bad next"))

        assert line == "4:15 error [INVALID_NEXT] bad next"

    def test_remote_diagnostic_shows_source(self, reporter):
        """Test that a diagnostic without code shows its source"""
        diagnostic = _diagnostic(0, 0, "remote", code=None, severity=DiagnosticSeverity.WARNING, source="stepfunctions")

        assert reporter.format_diagnostic(diagnostic) == "1:1 warning [stepfunctions] remote"

    def test_render_sorted_with_summary(self, reporter):
        """Test that diagnostics are listed in position order followed by a summary"""
        diagnostics = [
            _diagnostic(5, 2, "second"),
            _diagnostic(1, 4, "first", code=None, severity=DiagnosticSeverity.HINT),
        ]

        report = reporter.render(diagnostics, title="workflow.json")

        assert report.split("\n") == [
            "workflow.json",
            "  2:5 hint first",
            "  6:3 error [INVALID_NEXT] second",
            "1 error(s), 1 other diagnostic(s)",
        ]

    def test_render_without_diagnostics(self, reporter):
        """Test the report for a clean document"""
        assert reporter.render([]) == "No problems found"

    def test_icons_and_colors(self):
        """Test that icons and colors are applied when enabled"""
        reporter = DiagnosticsReporter()

        line = reporter.format_diagnostic(_diagnostic(0, 0))

        assert line.startswith("❌ ")
        assert Colors.ERROR in line
        assert reporter._strip_ansi_codes(line) == "❌ 1:1 error [INVALID_NEXT] msg"

    def test_print_report(self, reporter):
        """Test that print_report prints the rendered report"""
        with patch("builtins.print") as mock_print:
            reporter.print_report([])

        mock_print.assert_called_once_with("No problems found")

    def test_save_to_file_strips_colors(self, tmp_path):
        """Test that saved reports contain no ANSI codes"""
        reporter = DiagnosticsReporter(use_icons=False)
        output = tmp_path / "report.txt"

        reporter.save_to_file(reporter.render([_diagnostic(0, 0)]), str(output))

        assert output.read_text(encoding="utf-8") == "  1:1 error [INVALID_NEXT] msg\n1 error(s)"


class TestScopeVisualizer:
    """Test cases for ScopeVisualizer"""

    def test_nested_tree(self, visualizer):
        """Test the tree drawing for nested objects and arrays"""
        scope = VariableCompletionList(
            local_scope={
                "var_pass_before": None,
                "var_nested": {"array": [{"key1": None}], "object": {"k": None}},
            },
            outer_scope={},
        )

        assert visualizer.visualize(scope).split("\n") == [
            "Local scope",
            "├── $var_pass_before",
            "└── $var_nested",
            "    ├── array",
            "    │   └── [0]",
            "    │       └── key1",
            "    └── object",
            "        └── k",
            "Outer scope",
            "  (no variables)",
        ]

    def test_state_heading(self, visualizer):
        """Test that the state name heads the output"""
        scope = VariableCompletionList(local_scope={}, outer_scope={"var_parent": None})

        lines = visualizer.visualize(scope, state_name="Inner").split("\n")

        assert lines == ["Inner", "Local scope", "  (no variables)", "Outer scope", "└── $var_parent"]

    def test_variable_colored(self):
        """Test that variable names are colored when colors are enabled"""
        visualizer = ScopeVisualizer(use_icons=False)

        lines = visualizer.render_tree({"x": None}, "Local scope", "", Colors.LOCAL_SCOPE)

        assert lines[1] == f"└── {Colors.VARIABLE}$x{Colors.RESET}"

    def test_print_scope(self, visualizer):
        """Test that print_scope prints the rendered scope"""
        scope = VariableCompletionList(local_scope={}, outer_scope={})

        with patch("builtins.print") as mock_print:
            visualizer.print_scope(scope)

        mock_print.assert_called_once_with("Local scope\n  (no variables)\nOuter scope\n  (no variables)")
