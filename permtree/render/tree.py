"""Annotated tree display.

Each node becomes one indented line listing only the attributes it
overrides, for example::

    [0755 user:root(0) group:root(0)] /srv/data/
      [0644 user:alice(1001)] report.txt
      [error: permission denied] secret/
"""

from typing import List, Optional

from ..config import RenderConfig
from ..core.node import Node, NodeData
from ..core.visitor import NodeVisitor
from ..names import NameResolver


class TreeRenderer(NodeVisitor):
    """Visitor producing the annotated tree, one line per node."""

    def __init__(self,
                 resolver: NameResolver,
                 config: Optional[RenderConfig] = None,
                 lines: Optional[List[str]] = None,
                 root_label: Optional[str] = None):
        """Initialize renderer.

        Args:
            resolver: Resolver for user and group names
            config: Rendering options
            lines: Output buffer
            root_label: Text shown instead of the root's name (usually the
                full root path)
        """
        super().__init__(lines)
        self.resolver = resolver
        self.config = config or RenderConfig()
        self.root_label = root_label

    def visit(self, node: Node, depth: int) -> None:
        prefix = self.config.indent * depth
        name = self.root_label if depth == 0 and self.root_label else node.display_name()

        if not isinstance(node.data, NodeData):
            self.emit(f"{prefix}[error: {node.data}] {name}")
            return

        data = node.data
        if data.is_directory and not name.endswith('/'):
            name += '/'

        line = prefix
        attributes = self.describe(data)
        if attributes:
            line += f"[{' '.join(attributes)}] "
        line += name
        if data.listing_failed:
            line += f" [error: {data.children}]"
        self.emit(line)

    def describe(self, data: NodeData) -> List[str]:
        """Overridden attributes of ``data`` in display form."""
        attributes = []
        if data.override_mode is not None:
            attributes.append(format(data.override_mode, '04o'))
        if data.override_uid is not None:
            name = self.resolver.resolve_user(data.override_uid)
            attributes.append(f"user:{name}({data.override_uid})")
        if data.override_gid is not None:
            name = self.resolver.resolve_group(data.override_gid)
            attributes.append(f"group:{name}({data.override_gid})")
        return attributes
