"""Visitor base class for permtree.

Visitors decide what is produced for each node while the traverser decides
the order. Output goes into a line buffer owned by the caller, so the same
buffer can collect the output of several roots.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .node import Node


class NodeVisitor(ABC):
    """Abstract base class for traversal visitors.

    Instances are callable with ``(node, depth)`` and can be passed directly
    to ``traverse``.
    """

    def __init__(self, lines: Optional[List[str]] = None):
        """Initialize visitor with an output buffer.

        Args:
            lines: Buffer to append output lines to (a new list if omitted)
        """
        self.lines = lines if lines is not None else []

    @abstractmethod
    def visit(self, node: Node, depth: int) -> None:
        """Produce output for one node.

        Args:
            node: The node being visited
            depth: Its depth relative to the traversal root
        """
        pass

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def __call__(self, node: Node, depth: int) -> None:
        self.visit(node, depth)
