"""Flattening of a schema tree into a path -> node index."""

import re
from collections import defaultdict

from .node import PATH_DELIMITER, PathTreeNode

_WORD_RE = re.compile(r"[A-Za-z0-9]+")


class PathTreeNodesByPath(dict[str, PathTreeNode]):
    """Index of nodes by path.

    Parent links in the tree are weak, so the index holds on to the root for
    as long as its nodes are in use.
    """

    def __init__(self, root: PathTreeNode | None = None):
        super().__init__()
        self.root = root


def flatten_tree(root: PathTreeNode) -> PathTreeNodesByPath:
    """Collect every node carrying a payload, keyed by its slash-joined path.

    Children are visited in sorted order so the index is stable across runs.
    References are leaves: they are neither recorded nor descended into.
    """
    nodes_by_path = PathTreeNodesByPath(root)
    _traverse_collect_nodes([], root, nodes_by_path)
    return nodes_by_path


def _traverse_collect_nodes(path: list[str], node: PathTreeNode, nodes_by_path: PathTreeNodesByPath) -> None:
    if node.ref:
        return
    if node.payload is not None:
        nodes_by_path[PATH_DELIMITER.join(path)] = node
    for child_name in sorted(node.children):
        _traverse_collect_nodes(path + [child_name], node.children[child_name], nodes_by_path)


def _pascal_case(element: str) -> str:
    return "".join(word[:1].upper() + word[1:] for word in _WORD_RE.findall(element))


def assign_friendly_names(nodes_by_path: PathTreeNodesByPath) -> None:
    """Give every indexed node the shortest unique name built from the tail of
    its path, eg "CustomPropertyField2" for .../CustomProperty/Field2 when
    "Field2" alone is ambiguous.
    """
    elements = {path: node.path_elements() for path, node in nodes_by_path.items()}
    lengths = {path: 1 for path in nodes_by_path}

    def render(path: str) -> str:
        return "".join(_pascal_case(e) for e in elements[path][-lengths[path]:])

    while True:
        groups: dict[str, list[str]] = defaultdict(list)
        for path in nodes_by_path:
            groups[render(path)].append(path)

        grew = False
        for paths in groups.values():
            if len(paths) < 2:
                continue
            for path in paths:
                if lengths[path] < len(elements[path]):
                    lengths[path] += 1
                    grew = True
        if not grew:
            break

    # Whatever still collides after using the whole path gets the first free
    # counter suffix. Unsuffixed names are reserved up front so a counter
    # never takes a name another node renders to on its own.
    taken = {render(path) for path in nodes_by_path}
    assigned: set[str] = set()
    for path in sorted(nodes_by_path):
        name = render(path)
        if name in assigned:
            counter = 2
            while f"{name}{counter}" in taken or f"{name}{counter}" in assigned:
                counter += 1
            name = f"{name}{counter}"
        assigned.add(name)
        nodes_by_path[path].friendly_name = name
