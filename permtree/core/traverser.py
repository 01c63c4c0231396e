"""Preorder traversal for permtree.

This is the only traversal in the package. Both output modes are visitors
driven by it, so they always agree on order and depth.
"""

from typing import Callable, Iterator, Tuple

from .node import Node

Visit = Callable[[Node, int], None]


def walk(node: Node, depth: int = 0) -> Iterator[Tuple[Node, int]]:
    """Traverse the tree depth-first, pre-order.

    Yields a node before any of its children. Children are only descended
    into when the listing succeeded; nodes carrying an error are yielded and
    not expanded.

    Args:
        node: Starting node
        depth: Depth assigned to ``node``

    Yields:
        Tuples of (node, depth)
    """
    yield (node, depth)
    for child in node.children():
        yield from walk(child, depth + 1)


def traverse(node: Node, visit: Visit, depth: int = 0) -> None:
    """Call ``visit(node, depth)`` for every node in preorder.

    Args:
        node: Starting node
        visit: Visitor callable, typically a ``NodeVisitor`` instance
        depth: Depth assigned to ``node``
    """
    for current, current_depth in walk(node, depth):
        visit(current, current_depth)
