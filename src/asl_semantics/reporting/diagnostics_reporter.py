"""
Diagnostics Reporter

Renders validation diagnostics as a terminal listing:

    ❌ 4:15 error [INVALID_NEXT] The value of "Next" property must be the name of an existing state.
"""

from typing import List, Optional

from ..validation.diagnostics import Diagnostic, DiagnosticSeverity
from .base import SEVERITY_STYLES, BaseReporter, Colors, Icons


class DiagnosticsReporter(BaseReporter):
    """Formats diagnostics with 1-based line:column positions."""

    def format_location(self, diagnostic: Diagnostic) -> str:
        start = diagnostic.range.start
        return f"{start.line + 1}:{start.character + 1}"

    def format_diagnostic(self, diagnostic: Diagnostic) -> str:
        color, icon, label = SEVERITY_STYLES.get(diagnostic.severity, SEVERITY_STYLES[DiagnosticSeverity.ERROR])

        parts = [
            self._iconize(icon) + self._colorize(self.format_location(diagnostic), Colors.LOCATION),
            self._colorize(label, color),
        ]
        if diagnostic.code is not None:
            parts.append(self._colorize(f"[{diagnostic.code.value}]", Colors.CODE))
        elif diagnostic.source != "asl":
            parts.append(self._colorize(f"[{diagnostic.source}]", Colors.CODE))
        parts.append(diagnostic.message)
        return " ".join(parts)

    def render(self, diagnostics: List[Diagnostic], title: Optional[str] = None) -> str:
        """
        Render a full report.

        Args:
            diagnostics: Diagnostics to list, in document order
            title: Optional heading such as the file name

        Returns:
            Report text, one diagnostic per line followed by a summary line
        """
        lines = []
        if title:
            lines.append(self._colorize(title, Colors.TITLE))

        if not diagnostics:
            lines.append(self._iconize(Icons.SUCCESS) + self._colorize("No problems found", Colors.LOCAL_SCOPE))
            return "\n".join(lines)

        ordered = sorted(diagnostics, key=lambda d: (d.range.start.line, d.range.start.character))
        for diagnostic in ordered:
            lines.append(self._indent() + self.format_diagnostic(diagnostic))

        errors = sum(1 for d in diagnostics if d.severity == DiagnosticSeverity.ERROR)
        others = len(diagnostics) - errors
        summary = f"{errors} error(s)"
        if others:
            summary += f", {others} other diagnostic(s)"
        lines.append(self._colorize(summary, Colors.ERROR if errors else Colors.WARNING))
        return "\n".join(lines)

    def print_report(self, diagnostics: List[Diagnostic], title: Optional[str] = None) -> None:
        print(self.render(diagnostics, title))
