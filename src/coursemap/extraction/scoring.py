"""
Scoring Module - QM-style compliance status and score.
======================================================

Maps a module's element counts to a compliance status. The score is drawn
uniformly at random inside the band of that status:

    objectives, activities and assessments all present  -> compliant      85-99
    objectives plus activities or assessments           -> partial        70-84
    anything else with at least one element             -> non-compliant  40-69
    no elements at all                                  -> non-compliant  0

Pass a seeded ``random.Random`` to make the draw reproducible.

The manifest fallback and the synthetic default module use fixed scores
instead (see ``fallback_compliance`` and ``default_compliance``).
"""

import random
from typing import Optional

from coursemap.shared.schemas import ComplianceStatus, QMCompliance

COMPLIANT_BAND = (85, 99)
PARTIAL_BAND = (70, 84)
NON_COMPLIANT_BAND = (40, 69)

SCORE_BANDS = {
    ComplianceStatus.COMPLIANT: COMPLIANT_BAND,
    ComplianceStatus.PARTIAL: PARTIAL_BAND,
    ComplianceStatus.NON_COMPLIANT: NON_COMPLIANT_BAND,
}

# Manifest organization fallback: more than this many sub-items reads as partial
FALLBACK_ACTIVITY_THRESHOLD = 5
FALLBACK_PARTIAL_SCORE = 75
FALLBACK_NON_COMPLIANT_SCORE = 55

DEFAULT_MODULE_SCORE = 50

_rng = random.Random()


def classify(objectives: int, activities: int, assessments: int) -> ComplianceStatus:
    """Compliance status for a set of element counts."""
    if objectives > 0 and activities > 0 and assessments > 0:
        return ComplianceStatus.COMPLIANT
    if objectives > 0 and (activities > 0 or assessments > 0):
        return ComplianceStatus.PARTIAL
    return ComplianceStatus.NON_COMPLIANT


def score_compliance(
    objectives: int,
    activities: int,
    assessments: int,
    rng: Optional[random.Random] = None,
) -> QMCompliance:
    """
    Compute the compliance status and in-band score of a module.

    Args:
        objectives: Number of learning objectives
        activities: Number of activities
        assessments: Number of assessments
        rng: Random source for the in-band score (module default if None)

    Returns:
        QMCompliance with status and score

    Raises:
        ValueError: If any count is negative
    """
    if min(objectives, activities, assessments) < 0:
        raise ValueError(
            f"Element counts must be non-negative, got "
            f"({objectives}, {activities}, {assessments})"
        )

    if objectives + activities + assessments == 0:
        return QMCompliance(status=ComplianceStatus.NON_COMPLIANT, score=0)

    status = classify(objectives, activities, assessments)
    low, high = SCORE_BANDS[status]
    score = (rng or _rng).randint(low, high)

    return QMCompliance(status=status, score=score)


def fallback_compliance(activities: int) -> QMCompliance:
    """Fixed compliance for modules recovered from the manifest organization."""
    if activities > FALLBACK_ACTIVITY_THRESHOLD:
        return QMCompliance(status=ComplianceStatus.PARTIAL, score=FALLBACK_PARTIAL_SCORE)
    return QMCompliance(
        status=ComplianceStatus.NON_COMPLIANT, score=FALLBACK_NON_COMPLIANT_SCORE
    )


def default_compliance() -> QMCompliance:
    """Fixed compliance of the synthetic default module."""
    return QMCompliance(status=ComplianceStatus.NON_COMPLIANT, score=DEFAULT_MODULE_SCORE)
