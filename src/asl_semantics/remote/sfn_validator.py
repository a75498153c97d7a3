"""
Remote cross-check against the AWS Step Functions validation API.

The local validator only covers structure and references. This module sends the
document to ValidateStateMachineDefinition and maps every returned diagnostic back
onto the document through its JSON-pointer location ("/States/MyState/Next").
"""

import json
import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from colorama import Fore, Style

from ..document.ast_nodes import AstNode, find_prop_child_by_name, is_array_node, is_object_node
from ..document.loader import AslDocument, Position, Range
from ..validation.diagnostics import Diagnostic, DiagnosticSeverity

logger = logging.getLogger(__name__)

REMOTE_SOURCE = "stepfunctions"

_SEVERITIES = {
    "ERROR": DiagnosticSeverity.ERROR,
    "WARNING": DiagnosticSeverity.WARNING,
}


def _decode_pointer_segment(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def find_node_by_pointer(root: Optional[AstNode], pointer: Optional[str]) -> Optional[AstNode]:
    """
    Resolve a JSON pointer against the syntax tree.

    Resolution stops at the deepest node that exists, so a pointer to a missing field
    lands on the object that should contain it.

    Args:
        root: Root node of the document
        pointer: JSON pointer such as "/States/A/Next"

    Returns:
        The addressed node, or None when the document is empty
    """
    node = root
    if node is None or not pointer:
        return node

    for raw_segment in pointer.lstrip("/").split("/"):
        segment = _decode_pointer_segment(raw_segment)
        if is_object_node(node):
            prop = find_prop_child_by_name(node, segment)
            if prop is None or prop.value_node is None:
                return prop or node
            node = prop.value_node
        elif is_array_node(node) and segment.isdigit() and int(segment) < len(node.items):
            node = node.items[int(segment)]
        else:
            break
    return node


class StepFunctionsDefinitionValidator:
    """
    Validates documents with the Step Functions service.

    Attributes:
        client: boto3 Step Functions client, created lazily when not supplied
        use_colors: Whether to use colored output for messages
        verbose: Whether to print the service verdict and its diagnostics
    """

    def __init__(self, client=None, region_name: Optional[str] = None, use_colors: bool = True, verbose: bool = True):
        self._client = client
        self.region_name = region_name
        self.use_colors = use_colors
        self.verbose = verbose

    @property
    def client(self):
        if self._client is None:
            if self.region_name:
                self._client = boto3.client("stepfunctions", region_name=self.region_name)
            else:
                self._client = boto3.client("stepfunctions")
        return self._client

    def _colorize(self, text: str, color: str) -> str:
        if self.use_colors:
            return f"{color}{text}{Style.RESET_ALL}"
        return text

    def _print_status(self, message: str, color: str = Fore.WHITE) -> None:
        if self.verbose:
            print(self._colorize(message, color))

    def _to_diagnostic(self, document: AslDocument, entry: Dict[str, Any]) -> Diagnostic:
        node = find_node_by_pointer(document.root, entry.get("location"))
        if node is not None:
            diagnostic_range = document.range_of(node)
        else:
            diagnostic_range = Range(Position(0, 0), Position(0, 0))

        message = entry.get("message", "")
        if entry.get("code"):
            message = f"{entry['code']}: {message}"

        return Diagnostic(
            range=diagnostic_range,
            message=message,
            severity=_SEVERITIES.get(entry.get("severity"), DiagnosticSeverity.INFORMATION),
            source=REMOTE_SOURCE,
        )

    def validate(self, document: AslDocument) -> Dict[str, Any]:
        """
        Validate a document remotely.

        Args:
            document: Loaded document whose root is the workflow definition

        Returns:
            Dict with validation results containing:
            - success: Boolean indicating if the service call completed
            - result: "OK" or "FAIL" as answered by the service, None on failure
            - diagnostics: List of Diagnostic objects mapped onto the document
            - errors: List of error messages for failed calls
        """
        result = {"success": False, "result": None, "diagnostics": [], "errors": []}
        if not is_object_node(document.root):
            result["errors"].append("Document root is not an object")
            return result

        definition = json.dumps(document.root.value)
        try:
            response = self.client.validate_state_machine_definition(definition=definition)
        except (BotoCoreError, ClientError) as e:
            logger.warning("Remote validation failed: %s", e)
            self._print_status(f"❌ Validate State Machine Definition Process Failed: {e}", Fore.RED)
            result["errors"].append(str(e))
            return result

        result["success"] = True
        result["result"] = response.get("result")
        entries: List[Dict[str, Any]] = response.get("diagnostics", [])
        result["diagnostics"] = [self._to_diagnostic(document, entry) for entry in entries]

        if result["result"] == "OK":
            self._print_status("✅ State Machine definition is valid", Fore.GREEN)
            color, icon = Fore.YELLOW, "⚠️ "
        else:
            self._print_status(f"State Machine definition is invalid: {result['result']}", Fore.RED)
            color, icon = Fore.RED, "❌"
        for entry in entries:
            self._print_status(
                f"{icon} {entry.get('severity')}: {entry.get('code')}, {entry.get('message')} at {entry.get('location')}",
                color,
            )
        return result
