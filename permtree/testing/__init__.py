"""Testing utilities for permtree consumers."""

from .fixtures import (
    FakeEntry,
    InMemoryProbe,
    effective_attributes,
    fake_dir,
    fake_file,
    replay_commands,
    uniform_copy,
)

__all__ = [
    'FakeEntry',
    'InMemoryProbe',
    'effective_attributes',
    'fake_dir',
    'fake_file',
    'replay_commands',
    'uniform_copy',
]
