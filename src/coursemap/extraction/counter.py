"""
Counter Module - Approximate element counts by tag pattern.
===========================================================

Counts opening-tag occurrences (``<tag`` up to the next ``>``) without
parsing the document. Nesting depth and self-closing forms are ignored, and a
tag name also matches longer names that start with it (``<assessment`` hits
``<assessment_meta>``). Counts are therefore exact for flat descriptors and
may run high for nested or extended ones.
"""

import re
from functools import lru_cache
from typing import Iterable, NamedTuple

# Tag groups that make up each element category of a module descriptor
OBJECTIVE_TAGS = ("learning_outcome",)
ACTIVITY_TAGS = ("assignment", "discussion_topic")
ASSESSMENT_TAGS = ("quiz", "assessment")


class ElementCounts(NamedTuple):
    objectives: int
    activities: int
    assessments: int


@lru_cache(maxsize=64)
def _opening_tag_pattern(tag_name: str) -> re.Pattern[str]:
    return re.compile(rf"<{re.escape(tag_name)}[^>]*>")


def count_elements(text: str, tag_name: str) -> int:
    """
    Count opening-tag occurrences of ``tag_name`` in ``text``.

    Matching is case-sensitive.

    Example:
        >>> count_elements("<quiz id='1'/><quiz></quiz>", "quiz")
        2
    """
    return len(_opening_tag_pattern(tag_name).findall(text))


def count_tags(text: str, tag_names: Iterable[str]) -> int:
    """Sum of ``count_elements`` over several tag names."""
    return sum(count_elements(text, tag) for tag in tag_names)


def count_module_elements(text: str) -> ElementCounts:
    """Objective, activity and assessment counts of a module descriptor."""
    return ElementCounts(
        objectives=count_tags(text, OBJECTIVE_TAGS),
        activities=count_tags(text, ACTIVITY_TAGS),
        assessments=count_tags(text, ASSESSMENT_TAGS),
    )
