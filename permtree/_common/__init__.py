"""Common helpers shared across permtree.

Pure computation only, no I/O. This package must never import from the rest
of permtree to avoid circular dependencies.
"""

from typing import Union


def display_bytes(raw: Union[bytes, str]) -> str:
    """Return a printable form of a raw filename or path.

    Bytes that are not valid UTF-8 are shown as ``\\xNN`` escapes so the
    result can always be written to a text stream.
    """
    if isinstance(raw, str):
        return raw
    return raw.decode('utf-8', 'backslashreplace')


__all__ = ['display_bytes']
