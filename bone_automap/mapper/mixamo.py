"""Direct bone name mapping for Mixamo rigs.

Source: the engine's canonical skeleton (pelvis, spine_01, upperarm_l, ...)
Target: Mixamo skeleton (mixamorig prefix, e.g. mixamorigLeftArm)

Mixamo rigs are detected by a name signature and mapped by exact table
lookup, with no fuzzy scoring.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from .base import BaseMapper
from ..bones import BoneMapping, BoneMatch, bone_name

logger = logging.getLogger(__name__)

MIXAMO_SIGNATURE = "mixamorig"

# canonical bone name -> Mixamo bone name
_MIXAMO_BONE_PAIRS: Tuple[Tuple[str, str], ...] = (
    # Torso
    ("pelvis", "mixamorigHips"),
    ("spine_01", "mixamorigSpine"),
    ("spine_02", "mixamorigSpine1"),
    ("spine_03", "mixamorigSpine2"),
    ("neck_01", "mixamorigNeck"),
    ("head", "mixamorigHead"),
    ("head_leaf", "mixamorigHeadTop_End"),

    # Left arm
    ("clavicle_l", "mixamorigLeftShoulder"),
    ("upperarm_l", "mixamorigLeftArm"),
    ("lowerarm_l", "mixamorigLeftForeArm"),
    ("hand_l", "mixamorigLeftHand"),

    # Right arm
    ("clavicle_r", "mixamorigRightShoulder"),
    ("upperarm_r", "mixamorigRightArm"),
    ("lowerarm_r", "mixamorigRightForeArm"),
    ("hand_r", "mixamorigRightHand"),

    # Left leg
    ("thigh_l", "mixamorigLeftUpLeg"),
    ("calf_l", "mixamorigLeftLeg"),
    ("foot_l", "mixamorigLeftFoot"),
    ("ball_l", "mixamorigLeftToeBase"),
    ("ball_leaf_l", "mixamorigLeftToe_End"),

    # Right leg
    ("thigh_r", "mixamorigRightUpLeg"),
    ("calf_r", "mixamorigRightLeg"),
    ("foot_r", "mixamorigRightFoot"),
    ("ball_r", "mixamorigRightToeBase"),
    ("ball_leaf_r", "mixamorigRightToe_End"),

    # Left hand
    ("thumb_01_l", "mixamorigLeftHandThumb1"),
    ("thumb_02_l", "mixamorigLeftHandThumb2"),
    ("thumb_03_l", "mixamorigLeftHandThumb3"),
    ("thumb_04_leaf_l", "mixamorigLeftHandThumb4"),
    ("index_01_l", "mixamorigLeftHandIndex1"),
    ("index_02_l", "mixamorigLeftHandIndex2"),
    ("index_03_l", "mixamorigLeftHandIndex3"),
    ("index_04_leaf_l", "mixamorigLeftHandIndex4"),
    ("middle_01_l", "mixamorigLeftHandMiddle1"),
    ("middle_02_l", "mixamorigLeftHandMiddle2"),
    ("middle_03_l", "mixamorigLeftHandMiddle3"),
    ("middle_04_leaf_l", "mixamorigLeftHandMiddle4"),
    ("ring_01_l", "mixamorigLeftHandRing1"),
    ("ring_02_l", "mixamorigLeftHandRing2"),
    ("ring_03_l", "mixamorigLeftHandRing3"),
    ("ring_04_leaf_l", "mixamorigLeftHandRing4"),
    ("pinky_01_l", "mixamorigLeftHandPinky1"),
    ("pinky_02_l", "mixamorigLeftHandPinky2"),
    ("pinky_03_l", "mixamorigLeftHandPinky3"),
    ("pinky_04_leaf_l", "mixamorigLeftHandPinky4"),

    # Right hand
    ("thumb_01_r", "mixamorigRightHandThumb1"),
    ("thumb_02_r", "mixamorigRightHandThumb2"),
    ("thumb_03_r", "mixamorigRightHandThumb3"),
    ("thumb_04_leaf_r", "mixamorigRightHandThumb4"),
    ("index_01_r", "mixamorigRightHandIndex1"),
    ("index_02_r", "mixamorigRightHandIndex2"),
    ("index_03_r", "mixamorigRightHandIndex3"),
    ("index_04_leaf_r", "mixamorigRightHandIndex4"),
    ("middle_01_r", "mixamorigRightHandMiddle1"),
    ("middle_02_r", "mixamorigRightHandMiddle2"),
    ("middle_03_r", "mixamorigRightHandMiddle3"),
    ("middle_04_leaf_r", "mixamorigRightHandMiddle4"),
    ("ring_01_r", "mixamorigRightHandRing1"),
    ("ring_02_r", "mixamorigRightHandRing2"),
    ("ring_03_r", "mixamorigRightHandRing3"),
    ("ring_04_leaf_r", "mixamorigRightHandRing4"),
    ("pinky_01_r", "mixamorigRightHandPinky1"),
    ("pinky_02_r", "mixamorigRightHandPinky2"),
    ("pinky_03_r", "mixamorigRightHandPinky3"),
    ("pinky_04_leaf_r", "mixamorigRightHandPinky4"),
)


def build_bone_table(pairs: Iterable[Tuple[str, str]]) -> Mapping[str, str]:
    """Build a read-only lookup table, rejecting duplicate keys or values.

    Args:
        pairs: (source name, target name) pairs

    Returns:
        Read-only mapping source name -> target name
    """
    table = {}
    seen_values = set()
    for key, value in pairs:
        if key in table:
            raise ValueError(f"Duplicate bone table key: {key}")
        if value in seen_values:
            raise ValueError(f"Duplicate bone table value: {value}")
        table[key] = value
        seen_values.add(value)
    return MappingProxyType(table)


MIXAMO_BONE_MAP: Mapping[str, str] = build_bone_table(_MIXAMO_BONE_PAIRS)


class MixamoMapper(BaseMapper):
    """Exact table mapper for Mixamo target skeletons."""

    BONE_MAP: Mapping[str, str] = MIXAMO_BONE_MAP
    SIGNATURE: str = MIXAMO_SIGNATURE

    @classmethod
    def is_target_convention(cls, bone_names: Sequence[Any]) -> bool:
        """Check whether a skeleton uses Mixamo naming.

        Heuristic: true if any bone name contains the signature,
        case-insensitively.

        Args:
            bone_names: Bone names (or bones) of the skeleton

        Returns:
            True if the skeleton looks like a Mixamo rig
        """
        signature = cls.SIGNATURE.lower()
        return any(signature in bone_name(b).lower() for b in bone_names)

    @classmethod
    def expected_target(cls, source_name: str) -> Optional[str]:
        return cls.BONE_MAP.get(source_name)

    def direct_map(self, source_bones: Sequence[Any], target_bones: Sequence[Any]) -> BoneMapping:
        """Map canonical source bones onto Mixamo target bones.

        Source bones missing from the table, or whose Mixamo counterpart is
        not among the target bones, are skipped.

        Args:
            source_bones: Canonical skeleton bones
            target_bones: Mixamo skeleton bones

        Returns:
            mapping: Mixamo target name -> canonical source name
        """
        return self.map_bones(source_bones, target_bones)

    def _match(self, source_bones: Sequence[Any], target_bones: Sequence[Any]) -> List[BoneMatch]:
        target_names = {bone_name(b) for b in target_bones}

        matches = []
        for source in source_bones:
            source_name = bone_name(source)
            expected = self.expected_target(source_name)
            if expected is None or expected not in target_names:
                continue
            logger.debug("Mapped: %s -> %s", expected, source_name)
            matches.append(BoneMatch(target=expected, source=source_name, score=1.0, method='direct'))
        return matches


__all__ = [
    "MIXAMO_BONE_MAP",
    "MIXAMO_SIGNATURE",
    "MixamoMapper",
    "build_bone_table",
]
