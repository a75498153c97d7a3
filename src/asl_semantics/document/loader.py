"""
Document Loader

This module turns JSON or YAML text into the position-annotated syntax tree used by the
validator and the completion helpers.

Both languages are composed with PyYAML (JSON is a flow-style subset of YAML), which keeps
the character offsets of every node. Tab characters are replaced with spaces in JSON text
before composing; the replacement keeps every offset unchanged.

JSON text is composed with JsonFlowLoader so that keys of any length, and keys separated
from their colon by a line break, are accepted. Escaped surrogate pairs in strings and keys
are joined into a single character.

A key without a colon survives loading only in flow collections, which covers JSON and
flow-style YAML. In block-style YAML such a line ("  NewState" under States) stops the
composer, so the load fails with an "Invalid YAML document" error instead.
"""

import bisect
from dataclasses import dataclass
from pathlib import Path
import re
from typing import Any, Dict, Optional

import yaml
from colorama import Fore, Style
from yaml.constructor import SafeConstructor

from .ast_nodes import (
    ArrayNode,
    AstNode,
    BooleanNode,
    NullNode,
    NumberNode,
    ObjectNode,
    PropertyNode,
    StringNode,
)

JSON_LANGUAGE_ID = "json"
YAML_LANGUAGE_ID = "yaml"

_YAML_SUFFIXES = {".yaml", ".yml"}
_JSON_NUMBER = re.compile(r"^-?(0|[1-9]\d*)(\.\d+)?([eE][+-]?\d+)?$")

_NULL_TAG = "tag:yaml.org,2002:null"
_BOOL_TAG = "tag:yaml.org,2002:bool"
_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"
_SURROGATES = re.compile("[\ud800-\udfff]")


class JsonFlowLoader(yaml.SafeLoader):
    """
    SafeLoader for JSON text.

    YAML drops a pending implicit key once the scanner moves to another line or more
    than 1024 characters past it. JSON has neither limit, so inside flow collections
    pending keys are kept until the next ":", "," or closing bracket resolves them.
    """

    def stale_possible_simple_keys(self):
        if self.flow_level:
            return
        super().stale_possible_simple_keys()


def join_surrogate_pairs(text: str) -> str:
    """Combine "\\ud83d\\ude00"-style escaped pairs, which the scanner decodes one unit at a time."""
    if not _SURROGATES.search(text):
        return text
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


@dataclass(frozen=True)
class Position:
    """Zero-based line and character of a document location."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position


class AslDocument:
    """
    A loaded document: source text, language and syntax tree.

    Attributes:
        text: Original source text
        language_id: "json" or "yaml"
        root: Root node of the syntax tree, None for an empty document
        version: Edit counter supplied by the caller
    """

    def __init__(self, text: str, language_id: str, root: Optional[AstNode], version: int = 0):
        self.text = text
        self.language_id = language_id
        self.root = root
        self.version = version
        self._line_offsets = [0] + [match.end() for match in re.finditer(r"\r\n|\r|\n", text)]

    @property
    def is_yaml(self) -> bool:
        return self.language_id == YAML_LANGUAGE_ID

    def position_at(self, offset: int) -> Position:
        """Convert a character offset into a line/character position."""
        offset = max(0, min(offset, len(self.text)))
        line = bisect.bisect_right(self._line_offsets, offset) - 1
        return Position(line=line, character=offset - self._line_offsets[line])

    def offset_at(self, position: Position) -> int:
        """Convert a line/character position into a character offset."""
        if position.line >= len(self._line_offsets):
            return len(self.text)
        if position.line < 0:
            return 0
        line_start = self._line_offsets[position.line]
        if position.line + 1 < len(self._line_offsets):
            line_end = self._line_offsets[position.line + 1]
        else:
            line_end = len(self.text)
        return max(line_start, min(line_start + position.character, line_end))

    def range_of(self, node: AstNode) -> Range:
        return Range(self.position_at(node.offset), self.position_at(node.end))


class DocumentLoader:
    """Handles loading ASL documents from strings and files."""

    def __init__(self, use_colors: bool = True, verbose: bool = False):
        """Initialize the document loader.

        Args:
            use_colors: Whether to use colored output for messages
            verbose: Whether to print a status line for every load
        """
        self.use_colors = use_colors
        self.verbose = verbose
        self._constructor = SafeConstructor()

    def _colorize(self, text: str, color: str) -> str:
        if self.use_colors:
            return f"{color}{text}{Style.RESET_ALL}"
        return text

    def _print_status(self, message: str, color: str = Fore.WHITE) -> None:
        if self.verbose:
            print(self._colorize(message, color))

    def load_document_from_string(self, text: str, language_id: str = JSON_LANGUAGE_ID, version: int = 0) -> Dict[str, Any]:
        """
        Parse document text into an AslDocument.

        Args:
            text: JSON or YAML source
            language_id: "json" or "yaml"
            version: Edit counter stored on the document

        Returns:
            Dict with load result containing:
            - success: Boolean indicating if the text was parsed
            - document: AslDocument if successful, None otherwise
            - errors: List of error messages encountered during parsing
        """
        result = {"success": False, "document": None, "errors": []}
        if language_id not in (JSON_LANGUAGE_ID, YAML_LANGUAGE_ID):
            result["errors"].append(f"Unsupported language: {language_id}")
            return result

        source = text.replace("\t", " ") if language_id == JSON_LANGUAGE_ID else text
        try:
            loader_class = JsonFlowLoader if language_id == JSON_LANGUAGE_ID else yaml.SafeLoader
            yaml_root = yaml.compose(source, Loader=loader_class)
        except yaml.YAMLError as e:
            self._print_status(f"✘ Invalid {language_id.upper()} document: {e}", Fore.RED)
            result["errors"].append(f"Invalid {language_id.upper()} document: {e}")
            return result

        root = self._convert_node(yaml_root, source, None, set()) if yaml_root is not None else None
        result["document"] = AslDocument(text, language_id, root, version)
        result["success"] = True
        self._print_status(f"✓ Loaded {language_id.upper()} document ({len(text)} characters)", Fore.GREEN)
        return result

    def load_document_from_file(self, file_path: str) -> Dict[str, Any]:
        """
        Read and parse a document file; the language follows the file extension.

        Args:
            file_path: Path to a .json, .yaml or .yml file

        Returns:
            Dict with the same structure as load_document_from_string
        """
        path = Path(file_path)
        language_id = YAML_LANGUAGE_ID if path.suffix.lower() in _YAML_SUFFIXES else JSON_LANGUAGE_ID
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            self._print_status(f"✘ Error reading file: {e}", Fore.RED)
            return {"success": False, "document": None, "errors": [f"Error reading file: {e}"]}

        return self.load_document_from_string(text, language_id)

    def _convert_node(self, node: yaml.Node, source: str, parent: Optional[AstNode], ancestors: set) -> AstNode:
        offset = node.start_mark.index
        length = node.end_mark.index - offset

        # Recursive aliases would never terminate
        if id(node) in ancestors:
            return NullNode(offset, length, parent)

        if isinstance(node, yaml.MappingNode):
            object_node = ObjectNode(offset, length, parent)
            ancestors = ancestors | {id(node)}
            for key, value in node.value:
                object_node.properties.append(self._convert_property(key, value, source, object_node, ancestors))
            return object_node

        if isinstance(node, yaml.SequenceNode):
            array_node = ArrayNode(offset, length, parent)
            ancestors = ancestors | {id(node)}
            for item in node.value:
                array_node.items.append(self._convert_node(item, source, array_node, ancestors))
            return array_node

        return self._convert_scalar(node, parent)

    def _convert_property(self, key: yaml.Node, value: yaml.Node, source: str, parent: ObjectNode, ancestors: set) -> PropertyNode:
        key_start = key.start_mark.index
        key_end = key.end_mark.index
        prop = PropertyNode(key_start, key_end - key_start, parent)

        key_text = key.value if isinstance(key, yaml.ScalarNode) else source[key_start:key_end]
        prop.key_node = StringNode(key_start, key_end - key_start, join_surrogate_pairs(str(key_text)), prop)

        separator = source[key_end:value.start_mark.index]
        colon_index = separator.find(":")
        prop.colon_offset = key_end + colon_index if colon_index >= 0 else -1

        if not self._is_missing_value(value):
            prop.value_node = self._convert_node(value, source, prop, ancestors)
            prop.length = prop.value_node.end - key_start
        elif prop.colon_offset >= 0:
            prop.length = prop.colon_offset + 1 - key_start
        return prop

    def _is_missing_value(self, node: yaml.Node) -> bool:
        """An implicit null with no text is a value that has not been typed yet."""
        return (
            isinstance(node, yaml.ScalarNode)
            and node.tag == _NULL_TAG
            and node.value == ""
            and node.style is None
        )

    def _convert_scalar(self, node: yaml.ScalarNode, parent: Optional[AstNode]) -> AstNode:
        offset = node.start_mark.index
        length = node.end_mark.index - offset

        # Quoted scalars are always strings
        if node.style:
            return StringNode(offset, length, join_surrogate_pairs(node.value), parent)

        if node.tag == _NULL_TAG:
            return NullNode(offset, length, parent)
        if node.tag == _BOOL_TAG:
            return BooleanNode(offset, length, self._constructor.construct_yaml_bool(node), parent)
        if node.tag == _INT_TAG:
            return NumberNode(offset, length, self._constructor.construct_yaml_int(node), parent)
        if node.tag == _FLOAT_TAG:
            return NumberNode(offset, length, self._constructor.construct_yaml_float(node), parent)
        if _JSON_NUMBER.match(node.value):
            return NumberNode(offset, length, float(node.value), parent)
        return StringNode(offset, length, join_surrogate_pairs(node.value), parent)


def load_document(text: str, language_id: str = JSON_LANGUAGE_ID) -> Optional[AslDocument]:
    """
    Convenience wrapper returning the AslDocument, or None when the text does not parse.
    """
    return DocumentLoader(use_colors=False).load_document_from_string(text, language_id)["document"]
