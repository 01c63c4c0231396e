"""High-level API for permtree.

Simple functional interfaces over the builder, pruner and renderers. These
are what the command line uses; they also serve as the entry points for
calling permtree from other programs.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import OutputMode, PermtreeConfig, RenderConfig
from .core.builder import TreeBuilder
from .core.node import Node
from .core.probe import FileSystemProbe, MetadataProbe
from .core.pruner import prune
from .core.traverser import traverse
from .errors import (
    CollectErrorsPolicy,
    ConfigurationError,
    ContinueOnErrorsPolicy,
    ErrorPolicy,
    PathResolutionError,
)
from .names import NameResolver
from .render.commands import CommandSynthesizer
from .render.tree import TreeRenderer
from ._common import display_bytes

logger = logging.getLogger(__name__)

PathArg = Union[str, bytes]


def resolve_root(argument: PathArg) -> bytes:
    """Resolve one root argument to an absolute, symlink-free path.

    Raises:
        PathResolutionError: If the path does not exist or cannot be resolved
    """
    try:
        resolved = Path(os.fsdecode(argument)).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        reason = getattr(e, 'strerror', None) or str(e)
        raise PathResolutionError(argument, reason) from e
    return os.fsencode(str(resolved))


def resolve_roots(arguments: Sequence[PathArg]) -> List[bytes]:
    """Resolve every root argument before any of them is processed.

    The first failure aborts the whole resolution; nothing is returned for
    the arguments that did resolve.

    Raises:
        PathResolutionError: Naming the first argument that failed
    """
    return [resolve_root(argument) for argument in arguments]


def inspect_path(path: bytes,
                 probe: Optional[MetadataProbe] = None,
                 error_policy: Optional[ErrorPolicy] = None) -> Optional[Node]:
    """Build and prune the override tree rooted at ``path``.

    Args:
        path: Absolute root path
        probe: Metadata source (defaults to the real filesystem)
        error_policy: Observer for recoverable failures

    Returns:
        The pruned tree. The root always overrides all three attributes, so
        None is only returned for custom probes that break that rule.

    Example:
        >>> root = inspect_path(b"/srv/data")
        >>> print("\\n".join(render_tree(root, NameResolver())))
    """
    tree = TreeBuilder(probe, error_policy).build(path)
    return prune(tree)


def render_tree(node: Node,
                resolver: NameResolver,
                config: Optional[RenderConfig] = None,
                root_label: Optional[str] = None,
                lines: Optional[List[str]] = None) -> List[str]:
    """Render the annotated tree of ``node``.

    Returns:
        The output buffer with one line per node appended
    """
    renderer = TreeRenderer(resolver, config, lines, root_label=root_label)
    traverse(node, renderer)
    return renderer.lines


def synthesize_commands(node: Node,
                        root_path: bytes,
                        resolver: NameResolver,
                        config: Optional[RenderConfig] = None,
                        lines: Optional[List[str]] = None) -> List[str]:
    """Produce the commands reproducing the layout of ``node``.

    Args:
        node: Pruned tree
        root_path: Absolute path of the tree's root on disk

    Returns:
        The output buffer with one command per line appended, in the order
        they must be executed
    """
    synthesizer = CommandSynthesizer(root_path, resolver, config, lines)
    traverse(node, synthesizer)
    return synthesizer.lines


def run(arguments: Sequence[PathArg],
        config: Optional[PermtreeConfig] = None,
        resolver: Optional[NameResolver] = None,
        probe: Optional[MetadataProbe] = None,
        error_policy: Optional[ErrorPolicy] = None) -> List[str]:
    """Inspect every root and render it according to ``config``.

    All roots are resolved first; if any fails nothing is rendered.

    Args:
        arguments: Root paths as given by the user
        config: Run configuration (tree view by default)
        resolver: Name resolver shared by all roots
        probe: Metadata source (built from ``config.probe`` if omitted)
        error_policy: Observer for recoverable failures (built from
            ``config.warn_on_errors`` if omitted)

    Returns:
        Output lines for all roots, in argument order

    Raises:
        ConfigurationError: If the configuration is invalid
        PathResolutionError: If any root cannot be resolved
    """
    config = config or PermtreeConfig()
    problems = config.validate()
    if problems:
        raise ConfigurationError(problems)

    roots = resolve_roots(arguments)

    resolver = resolver or NameResolver()
    probe = probe or FileSystemProbe(follow_symlinks=config.probe.follow_symlinks)
    if error_policy is None:
        error_policy = ContinueOnErrorsPolicy() if config.warn_on_errors else CollectErrorsPolicy()

    lines: List[str] = []
    for root in roots:
        logger.info("Inspecting %s", display_bytes(root))
        tree = inspect_path(root, probe, error_policy)
        if tree is None:
            continue
        if config.mode is OutputMode.COMMANDS:
            synthesize_commands(tree, root, resolver, config.render, lines)
        else:
            render_tree(tree, resolver, config.render, display_bytes(root), lines)

    if isinstance(error_policy, CollectErrorsPolicy):
        stats = error_policy.get_statistics()
        if stats['total_errors']:
            logger.warning("%d entries could not be read (%d stat, %d listing failures)",
                           stats['total_errors'], stats['stat_errors'], stats['list_errors'])
    return lines
