"""
Position-annotated syntax tree for ASL documents.

Every node records the character offset and length of its source text so diagnostics
can point back into the document. The node types mirror JSON: objects hold property
nodes, property nodes hold a key node and an optional value node.

The helpers at the bottom of the module locate nodes by name or by offset and
answer questions about the "States" structure around a node.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

STATES_PROPERTY = "States"
PROCESSOR_PROPERTIES = ("ItemProcessor", "Iterator")


class AstNode:
    """Base class for all syntax tree nodes."""

    type = "node"

    def __init__(self, offset: int, length: int, parent: Optional["AstNode"] = None):
        self.offset = offset
        self.length = length
        self.parent = parent

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def children(self) -> List["AstNode"]:
        return []

    @property
    def value(self) -> Any:
        return None

    def contains(self, location: int) -> bool:
        """Check whether a document offset falls inside this node (bounds inclusive)."""
        return self.offset <= location <= self.offset + self.length

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(offset={self.offset}, length={self.length})"


class StringNode(AstNode):
    type = "string"

    def __init__(self, offset: int, length: int, value: str, parent: Optional[AstNode] = None):
        super().__init__(offset, length, parent)
        self._value = value

    @property
    def value(self) -> str:
        return self._value


class NumberNode(AstNode):
    type = "number"

    def __init__(self, offset: int, length: int, value: float, parent: Optional[AstNode] = None):
        super().__init__(offset, length, parent)
        self._value = value

    @property
    def value(self) -> float:
        return self._value


class BooleanNode(AstNode):
    type = "boolean"

    def __init__(self, offset: int, length: int, value: bool, parent: Optional[AstNode] = None):
        super().__init__(offset, length, parent)
        self._value = value

    @property
    def value(self) -> bool:
        return self._value


class NullNode(AstNode):
    type = "null"


class ArrayNode(AstNode):
    type = "array"

    def __init__(self, offset: int, length: int, parent: Optional[AstNode] = None):
        super().__init__(offset, length, parent)
        self.items: List[AstNode] = []

    @property
    def children(self) -> List[AstNode]:
        return self.items

    @property
    def value(self) -> List[Any]:
        return [item.value for item in self.items]


class PropertyNode(AstNode):
    """
    A key/value pair inside an object.

    Attributes:
        key_node: StringNode holding the property name
        value_node: Value node, None while the document is mid-edit
        colon_offset: Offset of the key/value separator, -1 when it is missing
    """

    type = "property"

    def __init__(self, offset: int, length: int, parent: Optional[AstNode] = None):
        super().__init__(offset, length, parent)
        self.key_node: Optional[StringNode] = None
        self.value_node: Optional[AstNode] = None
        self.colon_offset = -1

    @property
    def key(self) -> Optional[str]:
        return self.key_node.value if self.key_node is not None else None

    @property
    def children(self) -> List[AstNode]:
        return [node for node in (self.key_node, self.value_node) if node is not None]

    @property
    def value(self) -> Any:
        return self.value_node.value if self.value_node is not None else None


class ObjectNode(AstNode):
    type = "object"

    def __init__(self, offset: int, length: int, parent: Optional[AstNode] = None):
        super().__init__(offset, length, parent)
        self.properties: List[PropertyNode] = []

    @property
    def children(self) -> List[AstNode]:
        return self.properties

    @property
    def value(self) -> dict:
        return {prop.key: prop.value for prop in self.properties}


def is_object_node(node: Optional[AstNode]) -> bool:
    return isinstance(node, ObjectNode)


def is_array_node(node: Optional[AstNode]) -> bool:
    return isinstance(node, ArrayNode)


def is_property_node(node: Optional[AstNode]) -> bool:
    return isinstance(node, PropertyNode)


def is_string_node(node: Optional[AstNode]) -> bool:
    return isinstance(node, StringNode)


def find_prop_child_by_name(node: Optional[AstNode], name: str) -> Optional[PropertyNode]:
    """Return the first property of an object node with the given key."""
    if not is_object_node(node):
        return None
    for prop in node.properties:
        if prop.key == name:
            return prop
    return None


def get_list_of_state_names_from_states_node(node: PropertyNode, ignore_colon_offset: bool = False) -> List[str]:
    """
    Extract the state names declared under a "States" property.

    Properties that lack a key/value separator are skipped unless ignore_colon_offset is
    set, which is how a YAML document mid-edit still yields its state names.

    Args:
        node: Property node whose key is "States"
        ignore_colon_offset: Count properties without a separator as well

    Returns:
        List of state names in document order

    Raises:
        ValueError: If the node is not the "States" property node
    """
    if not is_property_node(node) or node.key != STATES_PROPERTY:
        raise ValueError("Not a state name property node")

    if not is_object_node(node.value_node):
        return []

    return [
        prop.key
        for prop in node.value_node.properties
        if prop.key is not None and (ignore_colon_offset or prop.colon_offset >= 0)
    ]


def find_node_at_location(root: Optional[AstNode], location: int) -> Optional[AstNode]:
    """Return the innermost node whose range contains the offset."""
    if root is None or not root.contains(location):
        return None

    for child in root.children:
        if child.contains(location):
            return find_node_at_location(child, location)
    return root


def find_closest_ancestor_node_by_name(node: Optional[AstNode], names: Union[str, Iterable[str]]) -> Optional[PropertyNode]:
    """Walk up from a node (inclusive) to the nearest property node whose key is one of names."""
    if isinstance(names, str):
        names = (names,)
    names = set(names)
    while node is not None:
        if is_property_node(node) and node.key in names:
            return node
        node = node.parent
    return None


def find_closest_ancestor_states_node(node: Optional[AstNode]) -> Optional[PropertyNode]:
    return find_closest_ancestor_node_by_name(node, STATES_PROPERTY)


def is_child_of_states(node: AstNode) -> bool:
    """True for the object node that holds the state declarations."""
    return is_property_node(node.parent) and node.parent.key == STATES_PROPERTY


def inside_state_node(node: AstNode) -> bool:
    """
    True for the object node of a state definition.

    The chain is: state object -> state property -> States object -> "States" property.
    """
    great_grand_parent = node.parent.parent.parent if node.parent and node.parent.parent else None
    return is_property_node(great_grand_parent) and great_grand_parent.key == STATES_PROPERTY


def _get_state_path(state_prop: PropertyNode) -> Tuple[Union[str, int], ...]:
    """
    Build the state path of a declaration by walking out through enclosing Map
    processors and Parallel branches.
    """
    path: List[Union[str, int]] = [state_prop.key]
    # state property -> States object -> "States" property -> scope object
    scope = state_prop.parent.parent.parent if state_prop.parent and state_prop.parent.parent else None

    while scope is not None and scope.parent is not None:
        container = scope.parent
        if is_property_node(container) and container.key in PROCESSOR_PROPERTIES:
            owner_object = container.parent
        elif is_array_node(container) and is_property_node(container.parent) and container.parent.key == "Branches":
            path.insert(0, container.items.index(scope))
            owner_object = container.parent.parent
        else:
            break

        owner_prop = owner_object.parent if owner_object is not None else None
        if not is_property_node(owner_prop) or not is_object_node(owner_prop.parent) or not is_child_of_states(owner_prop.parent):
            break
        path.insert(0, owner_prop.key)
        scope = owner_prop.parent.parent.parent

    return tuple(path)


def get_state_info(node: Optional[AstNode]) -> Optional[Dict[str, Any]]:
    """
    Find the state declaration (the property under "States") that encloses a node.

    Args:
        node: Any node of the document

    Returns:
        Dict with state details containing:
        - name: State name
        - type: Value of the state's "Type" field, None when missing
        - path: State path through enclosing Map/Parallel states
        - node: The state's property node
        None when the node is not inside any state
    """
    while node is not None:
        parent = node.parent
        if is_property_node(node) and is_object_node(parent) and is_child_of_states(parent):
            type_prop = find_prop_child_by_name(node.value_node, "Type")
            return {
                "name": node.key,
                "type": type_prop.value if type_prop is not None else None,
                "path": _get_state_path(node),
                "node": node,
            }
        node = parent
    return None
