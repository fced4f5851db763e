"""Bone name canonicalization for fuzzy matching."""

import re
from functools import lru_cache
from typing import Sequence, Tuple

# Rig prefix tokens stripped once from the front of a name.
# Order matters: the regex alternation tries them left to right.
DEFAULT_PREFIXES: Tuple[str, ...] = (
    "mixamorig",
    "mixamorig_",
    "rig_",
    "bone_",
    "jnt_",
    "joint_",
)

_SEPARATOR_RE = re.compile(r"[-.\s]")

# ASCII word boundaries: underscore is a word character, so "hand_left"
# keeps its "left" while a bare "left" collapses to "l".
_LEFT_WORD_RE = re.compile(r"\bleft\b", re.ASCII)
_RIGHT_WORD_RE = re.compile(r"\bright\b", re.ASCII)

_SIDE_MARKERS = (
    (re.compile(r"^l_"), "left_"),
    (re.compile(r"^r_"), "right_"),
    (re.compile(r"_l$"), "_left"),
    (re.compile(r"_r$"), "_right"),
)


@lru_cache(maxsize=16)
def _prefix_regex(prefixes: Tuple[str, ...]) -> "re.Pattern[str]":
    alternation = "|".join(re.escape(p) for p in prefixes)
    return re.compile(f"^({alternation})", re.IGNORECASE)


def normalize_bone_name(name: str, prefixes: Sequence[str] = DEFAULT_PREFIXES) -> str:
    """Canonicalize a bone name so that differently styled rigs compare equal.

    Steps, in order:
        1. lowercase
        2. hyphens, periods and whitespace become underscores
        3. strip one leading rig prefix (see DEFAULT_PREFIXES)
        4. whole-word "left"/"right" become "l"/"r"
        5. short side markers expand: "l_x" -> "left_x", "x_r" -> "x_right"

    Args:
        name: Raw bone name
        prefixes: Prefix tokens to strip (case-insensitive)

    Returns:
        normalized: Canonical name, only used transiently for scoring
    """
    normalized = name.lower()
    normalized = _SEPARATOR_RE.sub("_", normalized)

    if prefixes:
        normalized = _prefix_regex(tuple(prefixes)).sub("", normalized, count=1)

    normalized = _LEFT_WORD_RE.sub("l", normalized)
    normalized = _RIGHT_WORD_RE.sub("r", normalized)
    for pattern, replacement in _SIDE_MARKERS:
        normalized = pattern.sub(replacement, normalized)

    return normalized


__all__ = [
    "DEFAULT_PREFIXES",
    "normalize_bone_name",
]
