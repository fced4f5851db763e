"""String similarity for normalized bone names.

Scores fall in [0, 1] and are assigned by the first tier that applies:

1. exact match -> 1.0
2. containment -> 0.8 + 0.2 * shorter / longer
3. otherwise   -> 1 - levenshtein / max_length
"""

EXACT_SCORE = 1.0
CONTAINMENT_BASE = 0.8
CONTAINMENT_SPAN = 0.2


def levenshtein_distance(str1: str, str2: str) -> int:
    """Minimum number of single-character insertions, deletions and
    substitutions needed to turn `str1` into `str2`.

    Args:
        str1: First string
        str2: Second string

    Returns:
        distance: Edit distance (0 for identical strings)
    """
    # Rows i-1 and i of the (len1 + 1) x (len2 + 1) table
    previous = list(range(len(str2) + 1))

    for i, char1 in enumerate(str1, start=1):
        current = [i]
        for j, char2 in enumerate(str2, start=1):
            cost = 0 if char1 == char2 else 1
            current.append(min(
                previous[j] + 1,             # deletion
                current[j - 1] + 1,          # insertion
                previous[j - 1] + cost,      # substitution
            ))
        previous = current

    return previous[-1]


def similarity_score(name1: str, name2: str) -> float:
    """Similarity between two normalized bone names.

    Symmetric in its arguments. Callers pass non-empty names; two empty
    strings count as an exact match.

    Args:
        name1: Normalized bone name
        name2: Normalized bone name

    Returns:
        score: Value in [0, 1], 1.0 meaning identical
    """
    if name1 == name2:
        return EXACT_SCORE

    longer = max(len(name1), len(name2))
    shorter = min(len(name1), len(name2))

    if name1 in name2 or name2 in name1:
        return CONTAINMENT_BASE + (shorter / longer) * CONTAINMENT_SPAN

    distance = levenshtein_distance(name1, name2)
    return 1.0 - distance / longer


__all__ = [
    "EXACT_SCORE",
    "CONTAINMENT_BASE",
    "CONTAINMENT_SPAN",
    "levenshtein_distance",
    "similarity_score",
]
