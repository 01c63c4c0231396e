"""Configuration system for permtree.

This module defines how callers specify what a run should produce: which
output mode, how entries are probed and how output is formatted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class OutputMode(Enum):
    """What to produce for each root."""
    TREE = "tree"           # Annotated, indented tree
    COMMANDS = "commands"   # Shell commands reproducing the layout


@dataclass
class ProbeConfig:
    """Configuration for reading entry metadata."""

    follow_symlinks: bool = True  # stat() the link target rather than the link


@dataclass
class RenderConfig:
    """Configuration for both renderers."""

    indent_width: int = 2         # Spaces per depth level in tree output
    numeric_ids: bool = False     # Commands use uid/gid instead of names
    chown_command: str = "chown"
    chgrp_command: str = "chgrp"
    chmod_command: str = "chmod"

    @property
    def indent(self) -> str:
        return " " * self.indent_width


@dataclass
class PermtreeConfig:
    """Complete configuration for a permtree run."""

    mode: OutputMode = OutputMode.TREE
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    # Log a warning per unreadable entry instead of only a summary
    warn_on_errors: bool = False

    @classmethod
    def tree_view(cls, indent_width: int = 2) -> 'PermtreeConfig':
        """Create config for the annotated tree display.

        Args:
            indent_width: Spaces per depth level

        Returns:
            PermtreeConfig for tree output
        """
        return cls(mode=OutputMode.TREE, render=RenderConfig(indent_width=indent_width))

    @classmethod
    def reproduction(cls, numeric_ids: bool = False) -> 'PermtreeConfig':
        """Create config for reproduction commands.

        Args:
            numeric_ids: Emit numeric ids instead of names

        Returns:
            PermtreeConfig for command output
        """
        return cls(mode=OutputMode.COMMANDS, render=RenderConfig(numeric_ids=numeric_ids))

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.mode, OutputMode):
            errors.append(f"unknown output mode: {self.mode!r}")

        if self.render.indent_width < 0:
            errors.append("indent_width cannot be negative")

        for name in ('chown_command', 'chgrp_command', 'chmod_command'):
            if not getattr(self.render, name).strip():
                errors.append(f"{name} cannot be empty")

        return errors
