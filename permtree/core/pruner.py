"""Pruning of informationally empty subtrees.

A subtree is dropped when none of its nodes overrides anything and none of
them carries an error. Errors are never dropped: losing one would hide a
real problem from whoever reads the output.
"""

from dataclasses import replace
from typing import Optional

from ..errors import ProbeError
from .node import Node


def prune(node: Node) -> Optional[Node]:
    """Return a pruned copy of ``node``, or None if nothing survives.

    Bottom-up: children are pruned first, then the node is kept if it has an
    override, a surviving child, or an error. The input tree is not modified
    and pruning an already pruned tree returns an equal tree.

    Note that an empty directory without overrides is pruned away like any
    other fully inherited entry.
    """
    data = node.data
    if isinstance(data, ProbeError):
        return node

    if isinstance(data.children, ProbeError):
        # unknown contents, keep the node with its listing failure
        return node

    children = tuple(
        pruned for pruned in (prune(child) for child in data.children)
        if pruned is not None
    )
    if not data.has_overrides and not children:
        return None

    return replace(node, data=replace(data, children=children))
