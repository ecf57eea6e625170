"""Addressable tree of locations in an API description."""

import logging
import weakref
from collections.abc import Iterator

from .payload import Payload

logger = logging.getLogger(__name__)

PATH_DELIMITER = "/"


class PathTreeNode:
    """One addressable location in the document.

    ``path_element`` names this node among its siblings, eg "schemas" in
    components/schemas. Joining the path elements from the root (whose own
    element is empty) down to a node gives the node's unique path key.

    A node with a non-empty ``ref`` is a use of a definition that lives
    elsewhere in the tree; it never has children of its own.
    """

    def __init__(
        self,
        path_element: str = "",
        payload: Payload | None = None,
        ref: str = "",
        element_name: str = "",
    ):
        self.path_element = path_element
        self.payload = payload
        self.ref = ref
        # Used to disambiguate generated names, eg "Parameter" for anything
        # below a parameters node.
        self.element_name = element_name
        # Shortest unique alias for the full path name. Only known once the
        # whole tree has been built and indexed, see assign_friendly_names.
        self.friendly_name: str | None = None
        self.children: dict[str, "PathTreeNode"] = {}
        self._parent: weakref.ref | None = None

    def __repr__(self) -> str:
        ref = f", ref={self.ref!r}" if self.ref else ""
        return f"PathTreeNode({self.path!r}{ref})"

    @property
    def parent(self) -> "PathTreeNode | None":
        return self._parent() if self._parent is not None else None

    @property
    def is_structural(self) -> bool:
        return self.payload is None

    def add_child(self, child: "PathTreeNode") -> "PathTreeNode":
        """Attach ``child`` under its path element and return it.

        A second child with the same path element replaces the first.
        """
        if child.path_element in self.children:
            logger.warning(
                "Replacing existing node %r under %r",
                child.path_element,
                self.path or "<root>",
            )
        child._parent = weakref.ref(self)
        self.children[child.path_element] = child
        return child

    def path_elements(self) -> list[str]:
        """Path elements from the root down to this node, root excluded."""
        elements = []
        node = self
        while node is not None and node.parent is not None:
            elements.append(node.path_element)
            node = node.parent
        return elements[::-1]

    @property
    def path(self) -> str:
        return PATH_DELIMITER.join(self.path_elements())

    def get_node_by_path_elements(self, path: list[str]) -> "PathTreeNode | None":
        if not path:
            return self
        child = self.children.get(path[0])
        if child is None:
            return None
        return child.get_node_by_path_elements(path[1:])

    def get_node_by_path(self, path: str) -> "PathTreeNode | None":
        """Find a descendant by its slash-joined path.

        Path elements may themselves contain the delimiter, eg a content type
        such as "application/json", so each child name is matched as a whole
        before descending, longest names first.
        """
        path = path.removeprefix(PATH_DELIMITER)
        if path == "":
            return self

        for name in sorted(self.children, key=lambda n: (-len(n), n)):
            if not name:
                continue
            if path == name or path.startswith(name + PATH_DELIMITER):
                found = self.children[name].get_node_by_path(path[len(name):])
                if found is not None:
                    return found
        return None

    def walk(self) -> Iterator["PathTreeNode"]:
        """Yield this node and its descendants, pre-order, children sorted by name."""
        yield self
        for name in sorted(self.children):
            yield from self.children[name].walk()
