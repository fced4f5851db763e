"""Shared types for bone mapping."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict

# target bone name -> source bone name
BoneMapping = Dict[str, str]


@dataclass(frozen=True)
class BoneMetadata:
    """A bone as seen by the mappers: only its name matters."""
    name: str


@dataclass(frozen=True)
class BoneMatch:
    """One accepted target -> source assignment with its provenance.

    Attributes:
        target: Target bone name
        source: Source bone name
        score: Similarity score (1.0 for direct table hits)
        method: 'direct' or 'auto'
    """
    target: str
    source: str
    score: float
    method: str


def bone_name(bone: Any) -> str:
    """Extract a bone name from a str, a mapping with 'name', or an object with `.name`."""
    if isinstance(bone, str):
        return bone
    if isinstance(bone, Mapping):
        return bone["name"]
    return bone.name


@dataclass
class MappingStats:
    """Accumulated statistics over mapping calls.

    Updates are serialized by a lock, so one instance can be shared by
    mappers running in several threads.
    """
    calls: int = 0
    targets: int = 0
    mapped: int = 0
    total_ms: float = 0.0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def unmapped(self) -> int:
        return self.targets - self.mapped

    def record(self, num_targets: int, num_mapped: int, elapsed_ms: float):
        """Record the outcome of one mapping call."""
        with self._lock:
            self.calls += 1
            self.targets += num_targets
            self.mapped += num_mapped
            self.total_ms += elapsed_ms

    def reset(self):
        """Reset all statistics."""
        with self._lock:
            self.calls = 0
            self.targets = 0
            self.mapped = 0
            self.total_ms = 0.0

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        with self._lock:
            return {
                'calls': self.calls,
                'targets': self.targets,
                'mapped': self.mapped,
                'unmapped': self.unmapped,
                'total_ms': self.total_ms,
            }

    def coverage(self) -> float:
        """Fraction of target bones that received a source bone."""
        if self.targets == 0:
            return 0.0
        return self.mapped / self.targets


__all__ = [
    "BoneMapping",
    "BoneMetadata",
    "BoneMatch",
    "MappingStats",
    "bone_name",
]
