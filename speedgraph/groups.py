from __future__ import annotations

from typing import List, Tuple

UNKNOWN = "unknown"

# Order matters: first substring match wins.
GROUP_KEYWORDS: List[Tuple[str, str]] = [
    ("herb", "herbivore"),
    ("omni", "omnivore"),
    ("carn", "carnivore"),
    ("insect", "insectivore"),
    ("pisc", "piscivore"),
    ("frug", "frugivore"),
]

CANONICAL_GROUPS = [label for _, label in GROUP_KEYWORDS] + [UNKNOWN]


def normalize_group(value: object) -> str:
    """Map a free-text diet/category cell onto the canonical vocabulary.

    Values matching no keyword are returned lower-cased and trimmed, so custom
    category sets pass through unchanged.
    """
    s = ("" if value is None else str(value)).strip().lower()
    if not s:
        return UNKNOWN
    for keyword, label in GROUP_KEYWORDS:
        if keyword in s:
            return label
    return s
