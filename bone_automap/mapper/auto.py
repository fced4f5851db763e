"""Fuzzy name-similarity mapper for arbitrary rig naming conventions.

Every target bone is compared with every source bone after normalization.
The best scoring source is accepted when its score reaches the threshold.
Cost is O(T * S * L^2) for T target bones, S source bones and names of
length L, which is fine for rigs of a few hundred bones.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np
from scipy.optimize import linear_sum_assignment

from .base import ACCEPTANCE_THRESHOLD, BaseMapper
from ..bones import BoneMapping, BoneMatch, bone_name
from ..normalize import DEFAULT_PREFIXES, normalize_bone_name
from ..similarity import similarity_score

logger = logging.getLogger(__name__)


class AutoMapper(BaseMapper):
    """Maps bones by normalized-name similarity.

    Config keys (under `automap`):
        threshold: Minimum accepted score (default 0.6)
        prefixes: Rig prefixes stripped during normalization
        exclusive: Solve a one-to-one assignment instead of an independent
            best match per target (default False)
    """

    def __init__(self, config: Optional[dict] = None):
        super().__init__(config)
        automap_config = self.config.get('automap') or {}

        self.threshold = float(automap_config.get('threshold', ACCEPTANCE_THRESHOLD))
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {self.threshold}")

        prefixes = automap_config.get('prefixes', DEFAULT_PREFIXES)
        if isinstance(prefixes, str) or not isinstance(prefixes, (list, tuple)):
            raise ValueError(f"prefixes must be a list of strings, got {prefixes!r}")
        self.prefixes: Tuple[str, ...] = tuple(prefixes)

        self.exclusive = bool(automap_config.get('exclusive', False))

    def normalize(self, name: str) -> str:
        return normalize_bone_name(name, self.prefixes)

    def find_best_match(self, target_bone: str, source_bones: Sequence[str]) -> Optional[BoneMatch]:
        """Find the best matching source bone for one target bone.

        Ties keep the first source encountered.

        Args:
            target_bone: Target bone name
            source_bones: Source bone names, scanned in order

        Returns:
            BoneMatch, or None if nothing reaches the threshold
        """
        normalized_target = self.normalize(target_bone)
        best_match = None
        best_score = 0.0

        for source_bone in source_bones:
            score = similarity_score(normalized_target, self.normalize(source_bone))
            if score > best_score and score >= self.threshold:
                best_score = score
                best_match = source_bone

        if best_match is None:
            return None
        return BoneMatch(target=target_bone, source=best_match, score=best_score, method='auto')

    def score_matrix(self, source_bones: Sequence[Any], target_bones: Sequence[Any]) -> np.ndarray:
        """Pairwise similarity scores.

        Args:
            source_bones: Source bones (S)
            target_bones: Target bones (T)

        Returns:
            scores: (T, S) matrix, scores[t, s] for target t and source s
        """
        normalized_sources = [self.normalize(bone_name(b)) for b in source_bones]
        normalized_targets = [self.normalize(bone_name(b)) for b in target_bones]

        scores = np.zeros((len(normalized_targets), len(normalized_sources)), dtype=np.float64)
        for t, target in enumerate(normalized_targets):
            for s, source in enumerate(normalized_sources):
                scores[t, s] = similarity_score(target, source)
        return scores

    def _match(self, source_bones: Sequence[Any], target_bones: Sequence[Any]) -> List[BoneMatch]:
        source_names = [bone_name(b) for b in source_bones]
        target_names = [bone_name(b) for b in target_bones]

        if self.exclusive:
            return self._match_exclusive(source_names, target_names)

        matches = []
        for target in target_names:
            match = self.find_best_match(target, source_names)
            if match is not None:
                logger.debug("Mapped: %s -> %s (%.3f)", match.target, match.source, match.score)
                matches.append(match)
        return matches

    def _match_exclusive(self, source_names: List[str], target_names: List[str]) -> List[BoneMatch]:
        """One-to-one assignment maximizing the summed score.

        Pairs below the threshold are dropped after solving, so a target may
        stay unmapped even when a source is left over.
        """
        if not source_names or not target_names:
            return []

        scores = self.score_matrix(source_names, target_names)
        rows, cols = linear_sum_assignment(scores, maximize=True)

        matches = []
        for t, s in sorted(zip(rows.tolist(), cols.tolist())):
            score = float(scores[t, s])
            if score < self.threshold:
                continue
            logger.debug("Assigned: %s -> %s (%.3f)", target_names[t], source_names[s], score)
            matches.append(BoneMatch(
                target=target_names[t],
                source=source_names[s],
                score=score,
                method='auto',
            ))
        return matches


def auto_map(
    source_names: Sequence[str],
    target_names: Sequence[str],
    threshold: float = ACCEPTANCE_THRESHOLD,
) -> BoneMapping:
    """Map target bone names to source bone names by fuzzy similarity.

    Args:
        source_names: Source skeleton bone names
        target_names: Target skeleton bone names
        threshold: Minimum accepted score

    Returns:
        mapping: target name -> source name, unmatched targets omitted
    """
    mapper = AutoMapper({'automap': {'threshold': threshold}})
    return mapper.map_bones(source_names, target_names)


__all__ = [
    "AutoMapper",
    "auto_map",
]
