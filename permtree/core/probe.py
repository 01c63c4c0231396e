"""Metadata probes for permtree.

A probe answers two questions about a path: what are its permission
attributes, and (for directories) what are its immediate children. It is the
only place where the filesystem is touched, which lets the builder run
unchanged against an in-memory layout in tests.

Probes never raise for a single path. Every ``OSError`` comes back as a
``ProbeError`` value so that one unreadable entry cannot abort the walk.
"""

import os
import stat
from abc import ABC, abstractmethod
from typing import List, NamedTuple, Union

from ..errors import ProbeError
from .node import Attributes, NodeKind

# setuid/setgid/sticky plus the nine rwx bits
PERMISSION_BITS = 0o7777


class Metadata(NamedTuple):
    """Result of a successful metadata probe."""
    attributes: Attributes
    kind: NodeKind


class MetadataProbe(ABC):
    """Abstract access to path metadata and directory listings.

    Paths are raw bytes everywhere. Child paths returned by ``list_children``
    must be sorted by their final component so output is stable across runs.
    """

    @abstractmethod
    def probe(self, path: bytes) -> Union[Metadata, ProbeError]:
        """Read mode, uid, gid and kind of ``path``.

        Args:
            path: Path to probe

        Returns:
            Metadata on success, ProbeError on failure
        """
        pass

    @abstractmethod
    def list_children(self, path: bytes) -> Union[List[bytes], ProbeError]:
        """List the immediate children of directory ``path``.

        Listing failure is independent of metadata failure: a directory can
        be stat'ed and still refuse to be listed.

        Args:
            path: Directory to list

        Returns:
            Sorted list of child paths, or ProbeError on failure
        """
        pass


class FileSystemProbe(MetadataProbe):
    """Probe backed by ``os.stat``/``os.lstat`` and ``os.listdir``."""

    def __init__(self, follow_symlinks: bool = True):
        """Initialize filesystem probe.

        Args:
            follow_symlinks: Report the link target's metadata (``stat``)
                rather than the link's own (``lstat``)
        """
        self.follow_symlinks = follow_symlinks

    def probe(self, path: bytes) -> Union[Metadata, ProbeError]:
        try:
            st = os.stat(path, follow_symlinks=self.follow_symlinks)
        except OSError as e:
            return ProbeError.from_os_error(e)

        kind = NodeKind.DIRECTORY if stat.S_ISDIR(st.st_mode) else NodeKind.LEAF
        return Metadata(
            attributes=Attributes(
                mode=st.st_mode & PERMISSION_BITS,
                uid=st.st_uid,
                gid=st.st_gid,
            ),
            kind=kind,
        )

    def list_children(self, path: bytes) -> Union[List[bytes], ProbeError]:
        try:
            names = os.listdir(path)
        except OSError as e:
            return ProbeError.from_os_error(e)
        return [os.path.join(path, name) for name in sorted(names)]

    def __repr__(self) -> str:
        return f"FileSystemProbe(follow_symlinks={self.follow_symlinks})"
