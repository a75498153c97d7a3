"""
Diagnostic types produced by the structural validator.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Optional

from ..data_schema import get_diagnostic_messages
from ..document.ast_nodes import AstNode
from ..document.loader import AslDocument, Range


class DiagnosticSeverity(IntEnum):
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


class DiagnosticCode(str, Enum):
    INVALID_NEXT = "INVALID_NEXT"
    INVALID_DEFAULT = "INVALID_DEFAULT"
    INVALID_START_AT = "INVALID_START_AT"
    UNREACHABLE_STATE = "UNREACHABLE_STATE"
    NO_TERMINAL_STATE = "NO_TERMINAL_STATE"
    INVALID_PROPERTY_NAME = "INVALID_PROPERTY_NAME"
    MUTUALLY_EXCLUSIVE_CHOICE_PROPERTIES = "MUTUALLY_EXCLUSIVE_CHOICE_PROPERTIES"
    INVALID_JSON_PATH_OR_INTRINSIC = "INVALID_JSON_PATH_OR_INTRINSIC"
    INVALID_JSON_PATH_OR_INTRINSIC_STRING_ONLY = "INVALID_JSON_PATH_OR_INTRINSIC_STRING_ONLY"


@dataclass
class Diagnostic:
    """
    A single validation finding.

    Attributes:
        range: Document range the finding points at
        message: Human readable description
        code: Machine readable category
        severity: Always ERROR for structural findings
        source: Producer of the diagnostic ("asl" locally, "stepfunctions" for remote findings)
    """

    range: Range
    message: str
    code: Optional[DiagnosticCode] = None
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR
    source: str = "asl"


class DiagnosticFactory:
    """Builds diagnostics for a document using the configured message catalog."""

    def __init__(self, document: AslDocument, messages: Optional[Dict[str, str]] = None):
        self.document = document
        self.messages = messages if messages is not None else get_diagnostic_messages()

    def message_for(self, code: DiagnosticCode) -> str:
        return self.messages.get(code.value, code.value)

    def for_span(self, offset: int, length: int, code: DiagnosticCode) -> Diagnostic:
        diagnostic_range = Range(self.document.position_at(offset), self.document.position_at(offset + length))
        return Diagnostic(range=diagnostic_range, message=self.message_for(code), code=code)

    def for_node(self, node: AstNode, code: DiagnosticCode) -> Diagnostic:
        return self.for_span(node.offset, node.length, code)
