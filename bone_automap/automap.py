"""Unified bone auto-mapping interface.

Chooses a strategy per target skeleton:
- Mixamo direct table lookup when the target looks like a Mixamo rig
- Fuzzy name matching for everything else, and optionally for the
  target bones the direct lookup left unresolved

Usage:
    mapper = BoneAutoMapper.from_yaml("config/default.yaml")
    mapping = mapper.map_bones(source_names, target_names)  # {target: source}
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

import yaml

from .bones import BoneMapping, BoneMatch, MappingStats, bone_name
from .mapper import AutoMapper, MixamoMapper

logger = logging.getLogger(__name__)


class BoneAutoMapper:
    """Unified bone mapping interface.

    Encapsulates the complete mapping policy:
    1. Recognize a Mixamo target skeleton by its bone names
    2. Map table-covered bones by exact lookup
    3. Fuzzy-map the remaining target bones
    4. Merge, with direct entries taking precedence

    Attributes:
        auto_mapper: Fuzzy mapper
        direct_mapper: Mixamo table mapper
        direct_enabled: Whether the direct path is tried at all
        fallback: Whether unresolved targets go through the fuzzy mapper
    """

    def __init__(self, config: Optional[dict] = None):
        """Initialize mapper.

        Args:
            config: Configuration dict (from YAML)
        """
        self.config = config or {}

        direct_config = self.config.get('direct') or {}
        self.direct_enabled = bool(direct_config.get('enabled', True))
        self.fallback = bool(direct_config.get('fallback', True))

        self.auto_mapper = AutoMapper(self.config)
        self.direct_mapper = MixamoMapper(self.config)

        self.stats = MappingStats()

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "BoneAutoMapper":
        """Create mapper from YAML configuration file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            BoneAutoMapper instance
        """
        with open(yaml_path, 'r') as f:
            config = yaml.safe_load(f) or {}
        return cls(config)

    @classmethod
    def from_config(cls, config: dict) -> "BoneAutoMapper":
        """Create mapper from configuration dict."""
        return cls(config)

    def is_direct_target(self, target_bones: Sequence[Any]) -> bool:
        """Whether the direct table path applies to this target skeleton."""
        return self.direct_enabled and MixamoMapper.is_target_convention(target_bones)

    def map_bones(self, source_bones: Sequence[Any], target_bones: Sequence[Any]) -> BoneMapping:
        """Map target bones to source bones.

        Args:
            source_bones: Source skeleton bones (names or objects with a name)
            target_bones: Target skeleton bones (names or objects with a name)

        Returns:
            mapping: target bone name -> source bone name
        """
        mapping, _ = self.map_bones_verbose(source_bones, target_bones)
        return mapping

    def map_bones_verbose(
        self,
        source_bones: Sequence[Any],
        target_bones: Sequence[Any],
    ) -> Tuple[BoneMapping, dict]:
        """Map bones with verbose output for inspection.

        Args:
            source_bones: Source skeleton bones
            target_bones: Target skeleton bones

        Returns:
            Tuple of (mapping, verbose_dict) where verbose_dict contains:
                - strategy: 'direct', 'direct+auto' or 'auto'
                - matches: List of BoneMatch in the order they were accepted
                - unmapped: Target names without a source
                - elapsed_ms: Wall time of this call
        """
        start = time.perf_counter()
        target_names = [bone_name(b) for b in target_bones]

        matches: List[BoneMatch] = []
        if self.is_direct_target(target_names):
            strategy = 'direct'
            matches.extend(self.direct_mapper.match_bones(source_bones, target_names))

            resolved = {match.target for match in matches}
            unresolved = [name for name in target_names if name not in resolved]
            if self.fallback and unresolved:
                strategy = 'direct+auto'
                matches.extend(self.auto_mapper.match_bones(source_bones, unresolved))
        else:
            strategy = 'auto'
            matches.extend(self.auto_mapper.match_bones(source_bones, target_names))

        # Direct matches come first, so they win on conflicting keys
        mapping: BoneMapping = {}
        for match in matches:
            mapping.setdefault(match.target, match.source)

        unmapped = [name for name in target_names if name not in mapping]
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.stats.record(len(target_names), len(mapping), elapsed_ms)

        logger.info(
            "Bone mapping (%s): %d/%d target bones mapped",
            strategy, len(mapping), len(target_names),
        )
        if unmapped:
            logger.debug("Unmapped target bones: %s", ", ".join(unmapped))

        verbose_dict = {
            'strategy': strategy,
            'matches': matches,
            'unmapped': unmapped,
            'elapsed_ms': elapsed_ms,
        }
        return mapping, verbose_dict

    def reset_stats(self):
        """Reset statistics of this mapper and its sub-mappers."""
        self.stats.reset()
        self.auto_mapper.reset_stats()
        self.direct_mapper.reset_stats()

    @property
    def threshold(self) -> float:
        """Acceptance threshold of the fuzzy mapper."""
        return self.auto_mapper.threshold


def save_mapping(mapping: BoneMapping, path: Union[str, Path]):
    """Save a bone mapping to a YAML file.

    Args:
        mapping: target bone name -> source bone name
        path: Output file path
    """
    data = {'mappings': dict(mapping)}
    with open(path, 'w') as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)


def load_mapping(path: Union[str, Path]) -> BoneMapping:
    """Load a bone mapping saved by `save_mapping`.

    Args:
        path: YAML file path

    Returns:
        mapping: target bone name -> source bone name
    """
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping in {path}")
    mappings = data.get('mappings') or {}
    if not isinstance(mappings, dict):
        raise ValueError(f"Expected a 'mappings' dict in {path}, got {type(mappings).__name__}")
    return {str(target): str(source) for target, source in mappings.items()}


__all__ = [
    "BoneAutoMapper",
    "save_mapping",
    "load_mapping",
]
