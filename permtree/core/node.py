"""Node model for permtree.

A node records *differences*, not absolute values: each of mode, uid and gid
is either ``None`` (inherited from the parent directory) or the value that
differs from the parent's actual value. The root has no parent, so all three
of its fields are always present.

Failures are kept where they happen. A node whose metadata could not be read
carries a ``ProbeError`` instead of ``NodeData``; a directory that could not
be listed carries a ``ProbeError`` instead of its children.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple, Union

from .._common import display_bytes
from ..errors import ProbeError


class NodeKind(Enum):
    """Entry kind as far as inheritance is concerned."""
    DIRECTORY = "directory"
    LEAF = "leaf"


class Attributes(NamedTuple):
    """Actual (resolved) permission attributes of one entry.

    Also used as the parent context handed to children while building.
    """
    mode: int
    uid: int
    gid: int


@dataclass(frozen=True)
class NodeData:
    """Successfully probed data of a node.

    Attributes:
        kind: Directory or leaf
        override_mode: Mode (lowest 12 bits) if it differs from the parent
        override_uid: Owning user id if it differs from the parent
        override_gid: Owning group id if it differs from the parent
        children: Child nodes ordered by raw name, or the listing failure
    """
    kind: NodeKind
    override_mode: Optional[int] = None
    override_uid: Optional[int] = None
    override_gid: Optional[int] = None
    children: Union[Tuple['Node', ...], ProbeError] = ()

    @property
    def has_overrides(self) -> bool:
        """True if at least one attribute differs from the parent."""
        return (self.override_mode is not None
                or self.override_uid is not None
                or self.override_gid is not None)

    @property
    def listing_failed(self) -> bool:
        return isinstance(self.children, ProbeError)

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY


@dataclass(frozen=True)
class Node:
    """One filesystem entry.

    Attributes:
        name: Final path component as raw bytes
        data: Probed data, or the failure that prevented probing
    """
    name: bytes
    data: Union[NodeData, ProbeError]

    @property
    def ok(self) -> bool:
        """True if the metadata probe succeeded."""
        return isinstance(self.data, NodeData)

    @property
    def error(self) -> Optional[ProbeError]:
        """The failure carried by this node, if any.

        For a node whose metadata read failed this is that failure; for a
        directory whose listing failed it is the listing failure.
        """
        if isinstance(self.data, ProbeError):
            return self.data
        if isinstance(self.data.children, ProbeError):
            return self.data.children
        return None

    def children(self) -> Tuple['Node', ...]:
        """Successfully listed children, empty otherwise."""
        if isinstance(self.data, NodeData) and not isinstance(self.data.children, ProbeError):
            return self.data.children
        return ()

    def display_name(self) -> str:
        """Printable form of the raw name."""
        return display_bytes(self.name)

    def __repr__(self) -> str:
        return f"Node(name={self.name!r}, ok={self.ok})"
