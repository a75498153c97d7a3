"""
ASL Language Service

Entry point tying the document adapter to the analyses:

- do_validation: structural diagnostics for a whole document
- get_variable_scope: local and outer Assign variables of a state
- complete_state_names / complete_variables: completion candidates at an offset

The service keeps one VariableScopeResolver. Its reverse adjacency is rebuilt whenever
a request arrives for a document version other than the last one seen.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .completion.state_names import complete_state_names
from .completion.variables import get_variable_completions
from .document.ast_nodes import find_node_at_location, is_object_node
from .document.loader import AslDocument
from .options import AslOptions
from .scope.resolver import StateReference, VariableCompletionList, VariableScopeResolver
from .validation.diagnostics import Diagnostic
from .validation.state_validator import RootType, StateValidator

logger = logging.getLogger(__name__)


class AslLanguageService:
    """
    Semantic analysis for ASL documents.

    Attributes:
        options: Default analysis options, adjusted per document language
        schema: Property-schema tables, None for the packaged schema
    """

    def __init__(self, options: Optional[AslOptions] = None, schema: Optional[Dict[str, Any]] = None):
        self.options = options or AslOptions()
        self.schema = schema
        self.resolver = VariableScopeResolver()
        self._resolved_version: Optional[Tuple[int, int]] = None

    def _options_for(self, document: AslDocument) -> AslOptions:
        return self.options.for_language(document.is_yaml)

    def _get_asl(self, document: AslDocument) -> Dict[str, Any]:
        return document.root.value if is_object_node(document.root) else {}

    def _refresh_resolver(self, document: AslDocument) -> None:
        version = (id(document), document.version)
        if version != self._resolved_version:
            self.resolver.rebuild(self._get_asl(document))
            self._resolved_version = version
            logger.debug("Rebuilt variable scope map for document version %s", document.version)

    def do_validation(self, document: AslDocument) -> List[Diagnostic]:
        """
        Validate a document.

        Args:
            document: Loaded document

        Returns:
            Ordered list of diagnostics, empty when the root is not an object
        """
        if not is_object_node(document.root):
            return []

        self._refresh_resolver(document)
        options = self._options_for(document)
        validator = StateValidator(document, schema=self.schema, ignore_colon_offset=options.ignore_colon_offset)
        diagnostics = validator.validate(document.root, RootType.ROOT)
        logger.info("Validation produced %d diagnostic(s)", len(diagnostics))
        return diagnostics

    def get_variable_scope(self, document: AslDocument, target: StateReference,
                           current: Optional[StateReference] = None) -> VariableCompletionList:
        """
        Variables in scope when a state starts.

        Args:
            document: Loaded document
            target: State id or exact state path
            current: Where the search starts, defaults to the target

        Returns:
            VariableCompletionList with local and outer scopes
        """
        self._refresh_resolver(document)
        return self.resolver.get_variable_scope(target, current)

    def complete_state_names(self, document: AslDocument, offset: int) -> List[str]:
        node = find_node_at_location(document.root, offset)
        return complete_state_names(node, self._options_for(document))

    def complete_variables(self, document: AslDocument, offset: int) -> Optional[Dict[str, Any]]:
        """
        Variable candidates at an offset.

        Returns:
            Dict with "parent_path" and "items", or None outside fields that accept variables
        """
        node = find_node_at_location(document.root, offset)
        if node is None:
            return None
        self._refresh_resolver(document)
        return get_variable_completions(node, self.resolver.asl, previous_states=self.resolver.previous_states)
