"""Test fixtures for permtree consumers.

``FakeEntry`` trees describe a filesystem layout with arbitrary modes, owners
and failures, without needing root privileges or a real disk. ``InMemoryProbe``
serves such a layout to the builder, and ``replay_commands`` applies
synthesized commands back onto a layout so round trips can be checked.

Example:
    layout = fake_dir(0o755, 1, 1, {
        "a": fake_file(0o755, 1, 1),
        "b": fake_file(0o644, 2, 1),
    })
    probe = InMemoryProbe(b"/r", layout)
    tree = TreeBuilder(probe).build(b"/r")
"""

import copy
import errno
import os
import re
import shlex
from typing import Dict, Iterator, List, Optional, Tuple, Union

from ..core.node import Attributes, NodeKind
from ..core.probe import Metadata, MetadataProbe
from ..errors import ProbeError
from ..render.commands import decode_path

Name = Union[str, bytes]


class FakeEntry:
    """One entry of an in-memory layout.

    A directory has a ``children`` dict (possibly empty); a file has None.
    ``stat_error``/``list_error`` are errno values making the corresponding
    probe call fail.
    """

    def __init__(self,
                 mode: int,
                 uid: int,
                 gid: int,
                 children: Optional[Dict[Name, 'FakeEntry']] = None,
                 stat_error: Optional[int] = None,
                 list_error: Optional[int] = None):
        self.mode = mode
        self.uid = uid
        self.gid = gid
        self.children = None
        if children is not None:
            self.children = {os.fsencode(name): child for name, child in children.items()}
        self.stat_error = stat_error
        self.list_error = list_error

    @property
    def is_dir(self) -> bool:
        return self.children is not None

    @property
    def attributes(self) -> Attributes:
        return Attributes(self.mode, self.uid, self.gid)

    def walk(self, path: bytes) -> Iterator[Tuple[bytes, 'FakeEntry']]:
        """Yield (path, entry) for this entry and everything below it."""
        yield path, self
        for name, child in sorted((self.children or {}).items()):
            yield from child.walk(os.path.join(path, name))

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir else "file"
        return f"FakeEntry({kind}, {self.mode:04o}, uid={self.uid}, gid={self.gid})"


def fake_file(mode: int = 0o644, uid: int = 0, gid: int = 0,
              stat_error: Optional[int] = None) -> FakeEntry:
    return FakeEntry(mode, uid, gid, stat_error=stat_error)


def fake_dir(mode: int = 0o755, uid: int = 0, gid: int = 0,
             children: Optional[Dict[Name, FakeEntry]] = None,
             stat_error: Optional[int] = None,
             list_error: Optional[int] = None) -> FakeEntry:
    return FakeEntry(mode, uid, gid, children or {}, stat_error, list_error)


def _os_error(code: int) -> ProbeError:
    return ProbeError.from_os_error(OSError(code, os.strerror(code)))


class InMemoryProbe(MetadataProbe):
    """Probe serving a ``FakeEntry`` layout mounted at ``root_path``.

    Counts calls per path so tests can check that nothing is probed twice.
    """

    def __init__(self, root_path: bytes, root: FakeEntry):
        self.root_path = root_path
        self.entries = dict(root.walk(root_path))
        self.probe_calls: Dict[bytes, int] = {}
        self.list_calls: Dict[bytes, int] = {}

    def probe(self, path: bytes) -> Union[Metadata, ProbeError]:
        self.probe_calls[path] = self.probe_calls.get(path, 0) + 1
        entry = self.entries.get(path)
        if entry is None:
            return _os_error(errno.ENOENT)
        if entry.stat_error is not None:
            return _os_error(entry.stat_error)
        kind = NodeKind.DIRECTORY if entry.is_dir else NodeKind.LEAF
        return Metadata(attributes=entry.attributes, kind=kind)

    def list_children(self, path: bytes) -> Union[List[bytes], ProbeError]:
        self.list_calls[path] = self.list_calls.get(path, 0) + 1
        entry = self.entries.get(path)
        if entry is None:
            return _os_error(errno.ENOENT)
        if not entry.is_dir:
            return _os_error(errno.ENOTDIR)
        if entry.list_error is not None:
            return _os_error(entry.list_error)
        return [os.path.join(path, name) for name in sorted(entry.children)]


def uniform_copy(root: FakeEntry, attributes: Optional[Attributes] = None) -> FakeEntry:
    """Deep copy of ``root`` where every entry has the same attributes.

    Models a subtree freshly created with the root's settings (the root's
    own attributes unless ``attributes`` is given).
    """
    attributes = attributes or root.attributes
    fresh = copy.deepcopy(root)
    for _, entry in fresh.walk(b''):
        entry.mode, entry.uid, entry.gid = attributes
    return fresh


def effective_attributes(root_path: bytes, root: FakeEntry) -> Dict[bytes, Attributes]:
    """Attributes of every entry a probe can see, keyed by path.

    Entries whose metadata cannot be read are left out, as is everything
    below a directory that cannot be listed.
    """
    result = {}

    def _collect(path: bytes, entry: FakeEntry) -> None:
        if entry.stat_error is not None:
            return
        result[path] = entry.attributes
        if entry.is_dir and entry.list_error is None:
            for name, child in sorted(entry.children.items()):
                _collect(os.path.join(path, name), child)

    _collect(root_path, root)
    return result


_COMMAND_RE = re.compile(r"^printf '%b\\000' '([^']*)' \| xargs -0 (.*) --$")


def replay_commands(lines: List[str],
                    root_path: bytes,
                    root: FakeEntry,
                    users: Optional[Dict[str, int]] = None,
                    groups: Optional[Dict[str, int]] = None) -> None:
    """Apply synthesized commands to a layout, in order, like a shell would.

    Recursive commands update the target entry and every entry below it.
    Owner operands are looked up in ``users``/``groups`` and otherwise read
    as numeric ids.

    Raises:
        ValueError: If a line is not a command this module understands
    """
    users = users or {}
    groups = groups or {}
    entries = dict(root.walk(root_path))

    for line in lines:
        match = _COMMAND_RE.match(line)
        if not match:
            raise ValueError(f"Unrecognized command: {line!r}")
        target = entries[decode_path(match.group(1))]
        program, flag, operand = shlex.split(match.group(2))
        if flag != '-R':
            raise ValueError(f"Expected a recursive command: {line!r}")

        for _, entry in target.walk(b''):
            if program == 'chmod':
                entry.mode = int(operand, 8) & 0o7777
            elif program == 'chgrp':
                entry.gid = groups[operand] if operand in groups else int(operand)
            elif program == 'chown':
                user, _, group = operand.partition(':')
                entry.uid = users[user] if user in users else int(user)
                if group:
                    entry.gid = groups[group] if group in groups else int(group)
            else:
                raise ValueError(f"Unknown program {program!r}")
