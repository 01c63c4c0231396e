"""Core components of permtree.

Node model, metadata probes, the tree builder, the pruner and the single
preorder traversal used by every renderer.
"""

from .node import Attributes, Node, NodeData, NodeKind
from .probe import FileSystemProbe, Metadata, MetadataProbe, PERMISSION_BITS
from .builder import TreeBuilder, build_tree, node_name
from .pruner import prune
from .traverser import traverse, walk
from .visitor import NodeVisitor

__all__ = [
    "Attributes",
    "Node",
    "NodeData",
    "NodeKind",
    "FileSystemProbe",
    "Metadata",
    "MetadataProbe",
    "PERMISSION_BITS",
    "TreeBuilder",
    "build_tree",
    "node_name",
    "prune",
    "traverse",
    "walk",
    "NodeVisitor",
]
