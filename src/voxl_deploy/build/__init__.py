"""
Image and workspace builds.

Public API:
    - BuildTarget: The three image variants
    - ImageBuilder: docker buildx builds, QEMU setup, runtime export
    - WorkspaceTarget: Native or emulated dev container
    - WorkspaceBuilder: colcon builds and dev shells
"""

from .images import BuildTarget, ImageBuilder
from .workspace import WorkspaceTarget, WorkspaceBuilder

__all__ = [
    "BuildTarget",
    "ImageBuilder",
    "WorkspaceTarget",
    "WorkspaceBuilder",
]
