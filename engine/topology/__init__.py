"""
Topology analysis package exports.

This package provides the frozen dependency-graph snapshot and the bounded
path-finding primitives every correlation, impact and cascade computation
is built on.
"""

from engine.topology.graph import ConfigurationItem, GraphSnapshot, Relationship
from engine.topology.paths import Path, Reach, find_path, path_to, reachable, walk

__all__ = [
    "ConfigurationItem", "GraphSnapshot", "Relationship",
    "Path", "Reach", "find_path", "path_to", "reachable", "walk",
]
