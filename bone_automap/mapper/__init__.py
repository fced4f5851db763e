"""Bone mappers.

AutoMapper - Fuzzy normalized-name similarity for any naming convention.
MixamoMapper - Exact table lookup for Mixamo target rigs.

All parameters are read from YAML configuration files.
"""

from .base import (
    BaseMapper,
    ACCEPTANCE_THRESHOLD,
)
from .auto import AutoMapper, auto_map
from .mixamo import (
    MixamoMapper,
    MIXAMO_BONE_MAP,
    MIXAMO_SIGNATURE,
    build_bone_table,
)


__all__ = [
    "BaseMapper",
    "AutoMapper",
    "MixamoMapper",
    "ACCEPTANCE_THRESHOLD",
    "MIXAMO_BONE_MAP",
    "MIXAMO_SIGNATURE",
    "auto_map",
    "build_bone_table",
]
