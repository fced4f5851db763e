"""Bone Auto-Mapping Module.

Maps the bones of a target skeleton onto the bones of a source skeleton by
name, so that animation authored for one rig can be played on another.

Main classes:
- BoneAutoMapper: High-level unified interface (recommended)
- AutoMapper: Fuzzy name-similarity mapper for any naming convention
- MixamoMapper: Exact table mapper for Mixamo target rigs

Example:
    from bone_automap import BoneAutoMapper

    mapper = BoneAutoMapper.from_yaml("config/default.yaml")
    mapping = mapper.map_bones(source_names, target_names)  # {target: source}
"""

from .automap import BoneAutoMapper, save_mapping, load_mapping
from .bones import BoneMapping, BoneMatch, BoneMetadata, MappingStats
from .mapper import (
    ACCEPTANCE_THRESHOLD,
    AutoMapper,
    BaseMapper,
    MixamoMapper,
    auto_map,
)
from .normalize import normalize_bone_name
from .similarity import levenshtein_distance, similarity_score

__all__ = [
    "BoneAutoMapper",
    "AutoMapper",
    "BaseMapper",
    "MixamoMapper",
    "BoneMapping",
    "BoneMatch",
    "BoneMetadata",
    "MappingStats",
    "ACCEPTANCE_THRESHOLD",
    "auto_map",
    "normalize_bone_name",
    "levenshtein_distance",
    "similarity_score",
    "save_mapping",
    "load_mapping",
]
