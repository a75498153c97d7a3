"""
Base classes and utilities for reporters.

This module contains the color codes, icons, and base functionality shared by the
diagnostics reporter and the scope visualizer.
"""

import re

from ..validation.diagnostics import DiagnosticSeverity


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    # Severity colors
    ERROR = "\033[91m"  # Red
    WARNING = "\033[93m"  # Yellow
    INFORMATION = "\033[94m"  # Blue
    HINT = "\033[90m"  # Gray

    # Scope colors
    LOCAL_SCOPE = "\033[92m"  # Green
    OUTER_SCOPE = "\033[96m"  # Cyan
    VARIABLE = "\033[33m"  # Orange/Yellow
    TITLE = "\033[1;36m"  # Bold Cyan
    LOCATION = "\033[90m"  # Gray
    CODE = "\033[95m"  # Magenta


class Icons:
    """Unicode icons for diagnostics and scope output."""

    ERROR = "❌"
    WARNING = "⚠️"
    INFORMATION = "ℹ️"
    HINT = "💡"
    SUCCESS = "✅"

    STATE = "📍"
    LOCAL_SCOPE = "📦"
    OUTER_SCOPE = "🌐"
    VARIABLE = "🔤"
    ARRAY = "📚"
    EMPTY = "📭"


SEVERITY_STYLES = {
    DiagnosticSeverity.ERROR: (Colors.ERROR, Icons.ERROR, "error"),
    DiagnosticSeverity.WARNING: (Colors.WARNING, Icons.WARNING, "warning"),
    DiagnosticSeverity.INFORMATION: (Colors.INFORMATION, Icons.INFORMATION, "info"),
    DiagnosticSeverity.HINT: (Colors.HINT, Icons.HINT, "hint"),
}


class BaseReporter:
    """Base class for all reporters with common functionality."""

    def __init__(self, indent_size: int = 2, use_colors: bool = True, use_icons: bool = True):
        """Initialize the base reporter.

        Args:
            indent_size: Number of spaces for each indentation level
            use_colors: Whether to use ANSI colors in output
            use_icons: Whether to use Unicode icons in output
        """
        self.indent_size = indent_size
        self.indent_char = " "
        self.use_colors = use_colors
        self.use_icons = use_icons
        self.branch_chars = {"pipe": "│", "tee": "├──", "last": "└──", "space": " " * 3}

    def _indent(self, level: int = 1) -> str:
        return self.indent_char * self.indent_size * level

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_colors:
            return f"{color}{text}{Colors.RESET}"
        return text

    def _iconize(self, icon: str) -> str:
        """Add icon if icons are enabled."""
        if self.use_icons:
            return f"{icon} "
        return ""

    def _strip_ansi_codes(self, text: str) -> str:
        """Remove ANSI color codes from text for clean file output."""
        ansi_escape = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
        return ansi_escape.sub("", text)

    def save_to_file(self, text: str, file_path: str) -> None:
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(self._strip_ansi_codes(text))
