"""User and group name resolution with memoization.

Lookups go to the system identity database (``pwd``/``grp``) once per id and
are cached for the rest of the run. An id without a database entry is not an
error: it resolves to its decimal string.
"""

import grp
import pwd
from typing import Callable, Dict, Optional

Lookup = Callable[[int], str]


def _user_name(uid: int) -> str:
    return pwd.getpwuid(uid).pw_name


def _group_name(gid: int) -> str:
    return grp.getgrgid(gid).gr_name


class NameResolver:
    """Memoizing id -> name resolver.

    One instance is meant to be created per run and handed to whichever
    renderer needs names. It is not thread-safe.

    Example:
        >>> resolver = NameResolver()
        >>> resolver.resolve_user(0)
        'root'
    """

    def __init__(self,
                 user_lookup: Optional[Lookup] = None,
                 group_lookup: Optional[Lookup] = None):
        """Initialize resolver.

        Args:
            user_lookup: uid -> name function raising KeyError when unknown
                (defaults to the passwd database)
            group_lookup: gid -> name function raising KeyError when unknown
                (defaults to the group database)
        """
        self._user_lookup = user_lookup or _user_name
        self._group_lookup = group_lookup or _group_name
        self._users: Dict[int, str] = {}
        self._groups: Dict[int, str] = {}
        self.hits = 0
        self.misses = 0

    def resolve_user(self, uid: int) -> str:
        """Name of user ``uid``, or ``str(uid)`` if it has none."""
        return self._resolve(uid, self._users, self._user_lookup)

    def resolve_group(self, gid: int) -> str:
        """Name of group ``gid``, or ``str(gid)`` if it has none."""
        return self._resolve(gid, self._groups, self._group_lookup)

    def _resolve(self, ident: int, cache: Dict[int, str], lookup: Lookup) -> str:
        if ident in cache:
            self.hits += 1
            return cache[ident]

        self.misses += 1
        try:
            name = lookup(ident)
        except (KeyError, OverflowError):
            name = str(ident)
        cache[ident] = name
        return name

    def get_statistics(self) -> Dict[str, int]:
        return {
            'users': len(self._users),
            'groups': len(self._groups),
            'hits': self.hits,
            'misses': self.misses,
        }
