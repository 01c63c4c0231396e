"""Renderers for pruned permission trees.

Both are ``NodeVisitor`` subclasses driven by ``permtree.core.traverse``.
"""

from .tree import TreeRenderer
from .commands import CommandSynthesizer, decode_path, encode_path, escape_component

__all__ = [
    'TreeRenderer',
    'CommandSynthesizer',
    'decode_path',
    'encode_path',
    'escape_component',
]
