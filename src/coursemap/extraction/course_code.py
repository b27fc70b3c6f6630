"""
Course code generation from the course title.
"""

import random
from typing import Optional

_rng = random.Random()

MAX_INITIALS = 3
CODE_NUMBER_RANGE = (100, 999)


def generate_course_code(title: str, rng: Optional[random.Random] = None) -> str:
    """
    Derive a short course code from a title.

    Takes the uppercased initials of up to the first three words and appends
    a random number between 100 and 999.

    Example:
        >>> generate_course_code("Intro to Biology")  # doctest: +SKIP
        'ITB482'
    """
    initials = "".join(word[0].upper() for word in title.split()[:MAX_INITIALS])
    number = (rng or _rng).randint(*CODE_NUMBER_RANGE)
    return f"{initials}{number}"
