"""
Reporting Module

This module renders analysis results for the terminal.

Available reporters:
- DiagnosticsReporter: Colored diagnostic listing with line:column positions
- ScopeVisualizer: Local and outer variable scopes as ASCII key trees
"""

from .base import Colors, Icons
from .diagnostics_reporter import DiagnosticsReporter
from .scope_visualizer import ScopeVisualizer

__all__ = [
    "DiagnosticsReporter",
    "ScopeVisualizer",
    "Colors",
    "Icons",
]
