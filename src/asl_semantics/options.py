"""
Analysis options shared by the language service and the completion helpers.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class AslOptions:
    """
    Attributes:
        ignore_colon_offset: Treat "States" properties without a key/value separator as
            declared state names. YAML documents mid-edit rely on this.
    """

    ignore_colon_offset: bool = False

    def for_language(self, is_yaml: bool) -> "AslOptions":
        """Options adjusted for a document language (YAML always ignores the colon offset)."""
        if is_yaml and not self.ignore_colon_offset:
            return replace(self, ignore_colon_offset=True)
        return self
