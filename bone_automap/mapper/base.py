"""Base classes and defaults for bone mappers."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import yaml

from ..bones import BoneMapping, BoneMatch, MappingStats

logger = logging.getLogger(__name__)

# Minimum similarity for the fuzzy mapper to accept a candidate
ACCEPTANCE_THRESHOLD = 0.6


class BaseMapper(ABC):
    """Base class for bone mappers.

    All parameters are read from a configuration dict (loaded from YAML).
    Every key is optional.
    """

    def __init__(self, config: Optional[dict] = None):
        """Initialize mapper from configuration dict.

        Args:
            config: Configuration dict (typically loaded from YAML)
        """
        self.config = config or {}
        self.stats = MappingStats()

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "BaseMapper":
        """Create mapper from YAML configuration file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Mapper instance
        """
        with open(yaml_path, 'r') as f:
            config = yaml.safe_load(f) or {}
        return cls.from_config(config)

    @classmethod
    def from_config(cls, config: dict) -> "BaseMapper":
        """Create mapper from configuration dict.

        Args:
            config: Configuration dict

        Returns:
            Mapper instance
        """
        from .auto import AutoMapper
        from .mixamo import MixamoMapper

        mapper_type = (config.get('mapper') or {}).get('type', 'AutoMapper')

        if mapper_type == 'AutoMapper':
            return AutoMapper(config)
        elif mapper_type == 'MixamoMapper':
            return MixamoMapper(config)
        else:
            raise ValueError(f"Unknown mapper type: {mapper_type}")

    def map_bones(self, source_bones: Sequence[Any], target_bones: Sequence[Any]) -> BoneMapping:
        """Map target bones to source bones.

        Args:
            source_bones: Source skeleton bones (names or objects with a name)
            target_bones: Target skeleton bones (names or objects with a name)

        Returns:
            mapping: target bone name -> source bone name. Targets without an
                acceptable source are absent.
        """
        mapping: BoneMapping = {}
        for match in self.match_bones(source_bones, target_bones):
            mapping[match.target] = match.source
        return mapping

    def match_bones(self, source_bones: Sequence[Any], target_bones: Sequence[Any]) -> List[BoneMatch]:
        """Compute accepted matches with their scores and provenance.

        Safe to call from several threads on one instance: results are
        returned, never stored on the mapper.

        Args:
            source_bones: Source skeleton bones
            target_bones: Target skeleton bones

        Returns:
            matches: Accepted matches, in target iteration order
        """
        start = time.perf_counter()
        matches = self._match(source_bones, target_bones)
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        num_mapped = len({match.target for match in matches})
        self.stats.record(len(target_bones), num_mapped, elapsed_ms)
        logger.info(
            "%s mapping complete: %d/%d bones mapped",
            self.__class__.__name__, num_mapped, len(target_bones),
        )
        return matches

    @abstractmethod
    def _match(self, source_bones: Sequence[Any], target_bones: Sequence[Any]) -> List[BoneMatch]:
        """Compute accepted matches, in target iteration order.

        Args:
            source_bones: Source skeleton bones
            target_bones: Target skeleton bones

        Returns:
            matches: Accepted matches
        """
        pass

    def reset_stats(self):
        """Reset mapping statistics."""
        self.stats.reset()

    def get_stats(self) -> Dict[str, float]:
        """Statistics accumulated since the last reset."""
        return self.stats.to_dict()


__all__ = [
    "ACCEPTANCE_THRESHOLD",
    "BaseMapper",
]
