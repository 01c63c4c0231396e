"""Reproduction command synthesis.

Emits recursive ``chown``/``chgrp``/``chmod`` commands that turn a subtree
freshly created with the root's settings into the observed layout.

Order matters. Every command is recursive and rewrites the whole subtree
under its path, so a directory's commands must run before the commands of
anything inside it: the most specific command then is the last write to
touch each entry. Emitting in traversal preorder guarantees this.

Paths are passed as raw bytes. Every byte of every component is written as a
``\\0ooo`` escape for ``printf %b`` and the decoded, NUL-terminated path is
handed to the command by ``xargs -0``, so spaces, newlines, quotes and
non-UTF-8 bytes all survive as one argument::

    printf '%b\\000' '/\\0163\\0162\\0166' | xargs -0 chmod -R 00755 --
"""

import os
import shlex
from typing import List, Optional

from ..config import RenderConfig
from ..core.node import Node, NodeData
from ..core.visitor import NodeVisitor
from ..names import NameResolver


def escape_component(component: bytes) -> str:
    """Escape every byte of one path component for ``printf %b``."""
    return ''.join('\\0%03o' % byte for byte in component)


def encode_path(path: bytes) -> str:
    """Encode ``path`` as a ``printf %b`` argument, keeping ``/`` literal."""
    encoded = '/'.join(escape_component(part) for part in path.split(b'/') if part)
    if path.startswith(b'/'):
        encoded = '/' + encoded
    return encoded


def decode_path(encoded: str) -> bytes:
    """Inverse of ``encode_path``, as ``printf %b`` would evaluate it."""
    out = bytearray()
    i = 0
    while i < len(encoded):
        if encoded.startswith('\\0', i):
            out.append(int(encoded[i + 2:i + 5], 8))
            i += 5
        else:
            out.extend(encoded[i].encode('ascii'))
            i += 1
    return bytes(out)


class CommandSynthesizer(NodeVisitor):
    """Visitor producing one shell command per line.

    Keeps the path of the visited node as a stack of names, truncated and
    extended to the node's depth, so it follows the traversal as it
    backtracks past a sibling's subtree.
    """

    def __init__(self,
                 root_path: bytes,
                 resolver: NameResolver,
                 config: Optional[RenderConfig] = None,
                 lines: Optional[List[str]] = None):
        """Initialize synthesizer.

        Args:
            root_path: Absolute path of the traversal root
            resolver: Resolver for user and group names
            config: Rendering options
            lines: Output buffer
        """
        super().__init__(lines)
        self.root_path = root_path
        self.resolver = resolver
        self.config = config or RenderConfig()
        self._stack: List[bytes] = []

    def visit(self, node: Node, depth: int) -> None:
        if depth > 0:
            del self._stack[depth - 1:]
            self._stack.append(node.name)
        else:
            self._stack = []

        if not isinstance(node.data, NodeData):
            return

        path = self.current_path()
        for argv in self.commands_for(node.data):
            self.emit(self.format_command(path, argv))

    def current_path(self) -> bytes:
        return os.path.join(self.root_path, *self._stack) if self._stack else self.root_path

    def commands_for(self, data: NodeData) -> List[List[str]]:
        """Command argument vectors (without path) for one node's overrides."""
        commands = []
        uid, gid = data.override_uid, data.override_gid
        if uid is not None and gid is not None:
            owner = f"{self.user(uid)}:{self.group(gid)}"
            commands.append([self.config.chown_command, '-R', owner])
        elif uid is not None:
            commands.append([self.config.chown_command, '-R', self.user(uid)])
        elif gid is not None:
            commands.append([self.config.chgrp_command, '-R', self.group(gid)])

        if data.override_mode is not None:
            # extra leading zero: GNU chmod otherwise keeps setuid/setgid on directories
            commands.append([self.config.chmod_command, '-R', '0' + format(data.override_mode, '04o')])
        return commands

    def user(self, uid: int) -> str:
        return str(uid) if self.config.numeric_ids else self.resolver.resolve_user(uid)

    def group(self, gid: int) -> str:
        return str(gid) if self.config.numeric_ids else self.resolver.resolve_group(gid)

    @staticmethod
    def format_command(path: bytes, argv: List[str]) -> str:
        command = ' '.join(shlex.quote(arg) for arg in argv)
        return f"printf '%b\\000' '{encode_path(path)}' | xargs -0 {command} --"
