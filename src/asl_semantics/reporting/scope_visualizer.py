"""
Scope Visualizer

Draws the variables in scope at a state as ASCII key trees, one tree for the local
scope and one for the scope inherited from enclosing Map/Parallel states:

    📍 Pass_End
    📦 Local scope
    ├── $var_pass_before
    └── $var_nested
        ├── array
        │   └── [0]
        │       └── key1
        └── object
            └── nestedObjectKey
"""

from typing import Any, List, Optional

from ..scope.resolver import VariableCompletionList
from .base import BaseReporter, Colors, Icons


class ScopeVisualizer(BaseReporter):
    """Renders VariableCompletionList results as trees."""

    def _render_children(self, value: Any, prefix: str, lines: List[str]) -> None:
        if isinstance(value, dict):
            entries = [(str(key), child) for key, child in value.items()]
        elif isinstance(value, list):
            entries = [(f"[{index}]", child) for index, child in enumerate(value)]
        else:
            return

        for position, (label, child) in enumerate(entries):
            is_last = position == len(entries) - 1
            connector = self.branch_chars["last"] if is_last else self.branch_chars["tee"]
            lines.append(f"{prefix}{connector} {label}")
            extension = self.branch_chars["space"] if is_last else self.branch_chars["pipe"] + "  "
            self._render_children(child, prefix + extension + " ", lines)

    def render_tree(self, variables: dict, title: str, icon: str, color: str) -> List[str]:
        """
        Render one scope.

        Top-level names get the "$" prefix; nested keys and [index] entries do not.
        """
        lines = [self._iconize(icon) + self._colorize(title, color)]
        if not variables:
            lines.append(self._indent() + self._iconize(Icons.EMPTY) + self._colorize("(no variables)", Colors.DIM))
            return lines

        top_level = {f"${key}": value for key, value in variables.items()}
        tree_lines: List[str] = []
        self._render_children(top_level, "", tree_lines)
        lines.extend(self._colorize_variable(line) for line in tree_lines)
        return lines

    def _colorize_variable(self, line: str) -> str:
        marker = line.find("$")
        if marker < 0 or not self.use_colors:
            return line
        return line[:marker] + self._colorize(line[marker:], Colors.VARIABLE)

    def visualize(self, scope: VariableCompletionList, state_name: Optional[str] = None) -> str:
        lines = []
        if state_name:
            lines.append(self._iconize(Icons.STATE) + self._colorize(state_name, Colors.TITLE))
        lines.extend(self.render_tree(scope.local_scope, "Local scope", Icons.LOCAL_SCOPE, Colors.LOCAL_SCOPE))
        lines.extend(self.render_tree(scope.outer_scope, "Outer scope", Icons.OUTER_SCOPE, Colors.OUTER_SCOPE))
        return "\n".join(lines)

    def print_scope(self, scope: VariableCompletionList, state_name: Optional[str] = None) -> None:
        print(self.visualize(scope, state_name))
