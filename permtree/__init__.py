"""permtree - compact view of how permissions deviate down a directory tree.

permtree records, for every entry below a root, only the mode, owner and
group that differ from the parent directory, drops subtrees that carry no
such difference, and renders the result either as an annotated tree or as
the recursive chown/chgrp/chmod commands that reproduce the layout.

    from permtree import inspect_path, render_tree, NameResolver

    root = inspect_path(b"/srv/data")
    print("\\n".join(render_tree(root, NameResolver())))
"""

__version__ = "0.1.0"

from .config import OutputMode, PermtreeConfig, ProbeConfig, RenderConfig
from .errors import (
    CollectErrorsPolicy,
    ConfigurationError,
    ContinueOnErrorsPolicy,
    ErrorKind,
    ErrorPolicy,
    PathResolutionError,
    PermtreeError,
    ProbeError,
)
from .core import (
    Attributes,
    FileSystemProbe,
    MetadataProbe,
    Node,
    NodeData,
    NodeKind,
    NodeVisitor,
    TreeBuilder,
    build_tree,
    prune,
    traverse,
    walk,
)
from .names import NameResolver
from .render import CommandSynthesizer, TreeRenderer
from .api import (
    inspect_path,
    render_tree,
    resolve_root,
    resolve_roots,
    run,
    synthesize_commands,
)

__all__ = [
    "__version__",
    # Config
    "OutputMode",
    "PermtreeConfig",
    "ProbeConfig",
    "RenderConfig",
    # Errors
    "CollectErrorsPolicy",
    "ConfigurationError",
    "ContinueOnErrorsPolicy",
    "ErrorKind",
    "ErrorPolicy",
    "PathResolutionError",
    "PermtreeError",
    "ProbeError",
    # Core
    "Attributes",
    "FileSystemProbe",
    "MetadataProbe",
    "Node",
    "NodeData",
    "NodeKind",
    "NodeVisitor",
    "TreeBuilder",
    "build_tree",
    "prune",
    "traverse",
    "walk",
    # Rendering
    "NameResolver",
    "CommandSynthesizer",
    "TreeRenderer",
    # API
    "inspect_path",
    "render_tree",
    "resolve_root",
    "resolve_roots",
    "run",
    "synthesize_commands",
]
