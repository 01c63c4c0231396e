"""Error model for permtree.

Two families of errors exist:

- Recoverable, per-node failures (a path that cannot be stat'ed, a directory
  that cannot be listed). These never raise past the builder: they are turned
  into ``ProbeError`` values and stored in the tree where the entry would
  have been.
- Fatal failures (a root argument that cannot be resolved, an invalid
  configuration). These are exceptions derived from ``PermtreeError`` and
  abort the whole run.

Error policies observe the recoverable failures as the builder records them.
They never change what ends up in the tree; they decide what gets logged and
keep statistics for a summary at the end of a run.
"""

import errno
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ._common import display_bytes

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Classification of an ``OSError`` raised while probing a path."""
    NOT_FOUND = "not found"
    PERMISSION_DENIED = "permission denied"
    NOT_A_DIRECTORY = "not a directory"
    LOOP = "too many levels of symbolic links"
    IO = "i/o error"
    OTHER = "error"

    @classmethod
    def from_errno(cls, code: Optional[int]) -> 'ErrorKind':
        """Map an errno value onto an error kind."""
        return _ERRNO_KINDS.get(code, cls.OTHER)


_ERRNO_KINDS = {
    errno.ENOENT: ErrorKind.NOT_FOUND,
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
    errno.EPERM: ErrorKind.PERMISSION_DENIED,
    errno.ENOTDIR: ErrorKind.NOT_A_DIRECTORY,
    errno.ELOOP: ErrorKind.LOOP,
    errno.EIO: ErrorKind.IO,
}


@dataclass(frozen=True)
class ProbeError:
    """A recorded, recoverable failure of a metadata read or a listing.

    Attributes:
        kind: Classified error kind
        message: The operating system's message (``strerror``)
        code: Raw errno value, if the error carried one
    """
    kind: ErrorKind
    message: str = ""
    code: Optional[int] = None

    @classmethod
    def from_os_error(cls, error: OSError) -> 'ProbeError':
        """Build a ProbeError from an ``OSError``."""
        return cls(
            kind=ErrorKind.from_errno(error.errno),
            message=error.strerror or str(error),
            code=error.errno,
        )

    def __str__(self) -> str:
        return self.kind.value


class PermtreeError(Exception):
    """Base class for fatal permtree errors."""
    pass


class PathResolutionError(PermtreeError):
    """Raised when a root argument cannot be canonicalized.

    The literal argument is kept so the diagnostic can name it.
    """

    def __init__(self, argument: Union[str, bytes], reason: str):
        self.argument = argument
        self.reason = reason
        super().__init__(f"cannot resolve {argument!r}: {reason}")


class ConfigurationError(PermtreeError):
    """Raised when a configuration fails validation."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__(f"Invalid configuration: {'; '.join(self.problems)}")


class ErrorPolicy(ABC):
    """Observer for recoverable failures recorded during a tree build.

    Subclasses decide how failures are reported. Whatever a policy does, the
    builder stores the failure in the tree afterwards: a policy cannot turn
    a per-node failure into a fatal one.
    """

    @abstractmethod
    def record(self, error: ProbeError, operation: str, path: bytes) -> None:
        """Record a failure.

        Args:
            error: The failure that will be stored in the tree
            operation: What failed ('stat' or 'list')
            path: Path of the entry being processed
        """
        pass


class CollectErrorsPolicy(ErrorPolicy):
    """Policy that collects all failures, logging them only at DEBUG level.

    Useful for collecting errors and presenting a summary at the end.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    def record(self, error: ProbeError, operation: str, path: bytes) -> None:
        self.errors.append({
            'path': path,
            'operation': operation,
            'kind': error.kind,
            'message': error.message,
        })
        logger.debug("%s failed for %s: %s", operation, display_bytes(path), error.message or error)

    def get_statistics(self) -> Dict[str, Any]:
        """Get statistics about failures recorded so far.

        Returns:
            Dictionary with error counts and details
        """
        by_kind: Dict[str, int] = {}
        for record in self.errors:
            key = record['kind'].name.lower()
            by_kind[key] = by_kind.get(key, 0) + 1
        return {
            'total_errors': len(self.errors),
            'stat_errors': sum(1 for e in self.errors if e['operation'] == 'stat'),
            'list_errors': sum(1 for e in self.errors if e['operation'] == 'list'),
            'by_kind': by_kind,
            'errors': self.errors,
        }


class ContinueOnErrorsPolicy(CollectErrorsPolicy):
    """Policy that collects failures and logs a warning for each one."""

    def record(self, error: ProbeError, operation: str, path: bytes) -> None:
        super().record(error, operation, path)
        if error.kind is ErrorKind.PERMISSION_DENIED:
            logger.warning("Skipping inaccessible path %s: %s", display_bytes(path), error)
        else:
            logger.warning("Error in %s for %s: %s", operation, display_bytes(path), error)
