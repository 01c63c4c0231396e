"""Tree construction for permtree.

The builder walks a directory recursively through a ``MetadataProbe`` and
records, for every entry, only the attributes that differ from its immediate
parent. Comparison is always against the parent's *actual* values, so a
grandchild inherits its grandparent's value through an untouched child
because the child did not override it either.
"""

import logging
import os
from typing import Optional

from .._common import display_bytes
from ..errors import CollectErrorsPolicy, ErrorPolicy, ProbeError
from .node import Attributes, Node, NodeData, NodeKind
from .probe import FileSystemProbe, MetadataProbe

logger = logging.getLogger(__name__)


def node_name(path: bytes) -> bytes:
    """Final component of ``path``; the whole path when that is empty (``/``)."""
    name = os.path.basename(path.rstrip(b'/'))
    return name or path


def _overrides(actual: Attributes, parent: Optional[Attributes]) -> dict:
    if parent is None:
        # the root has nothing to inherit from
        return dict(override_mode=actual.mode, override_uid=actual.uid, override_gid=actual.gid)
    return dict(
        override_mode=actual.mode if actual.mode != parent.mode else None,
        override_uid=actual.uid if actual.uid != parent.uid else None,
        override_gid=actual.gid if actual.gid != parent.gid else None,
    )


class TreeBuilder:
    """Builds override trees from a probe.

    Example:
        >>> builder = TreeBuilder(FileSystemProbe())
        >>> root = builder.build(b"/srv/data")
    """

    def __init__(self,
                 probe: Optional[MetadataProbe] = None,
                 error_policy: Optional[ErrorPolicy] = None):
        """Initialize the builder.

        Args:
            probe: Metadata source (defaults to the real filesystem)
            error_policy: Observer for recoverable failures
                (defaults to CollectErrorsPolicy)
        """
        self.probe = probe or FileSystemProbe()
        self.error_policy = error_policy or CollectErrorsPolicy()

    def build(self, path: bytes, parent_context: Optional[Attributes] = None) -> Node:
        """Build the node for ``path`` and, recursively, its subtree.

        Args:
            path: Path of the entry
            parent_context: Actual attributes of the parent directory,
                None for the root

        Returns:
            The node; failures are stored in it, never raised
        """
        name = node_name(path)
        logger.debug("Probing %s", display_bytes(path))

        metadata = self.probe.probe(path)
        if isinstance(metadata, ProbeError):
            self.error_policy.record(metadata, 'stat', path)
            return Node(name=name, data=metadata)

        actual = metadata.attributes
        overrides = _overrides(actual, parent_context)

        if metadata.kind is not NodeKind.DIRECTORY:
            return Node(name=name, data=NodeData(kind=NodeKind.LEAF, **overrides))

        listing = self.probe.list_children(path)
        if isinstance(listing, ProbeError):
            self.error_policy.record(listing, 'list', path)
            children = listing
        else:
            # children compare against this node's actual values, whether or
            # not this node overrode its own parent
            children = tuple(self.build(child, actual) for child in listing)

        return Node(
            name=name,
            data=NodeData(kind=NodeKind.DIRECTORY, children=children, **overrides),
        )


def build_tree(path: bytes,
               probe: Optional[MetadataProbe] = None,
               error_policy: Optional[ErrorPolicy] = None) -> Node:
    """Build the override tree rooted at ``path``.

    Convenience wrapper around ``TreeBuilder``.
    """
    return TreeBuilder(probe, error_policy).build(path)
