#!/usr/bin/env python3
"""
Question Selection - Random quiz questions with policy-area diversity.
"""

import random
from typing import Dict, List, Optional, Sequence

from core.matcher.models import POLICY_AREAS, Question


def select_questions(
    questions: Sequence[Question],
    count: int,
    rng: Optional[random.Random] = None
) -> List[Question]:
    """
    Select `count` random questions covering every policy area when possible.

    1. One random question from each policy area that has any
    2. Remaining slots filled at random from the leftover pool
    3. Final shuffle so questions of one area are not grouped together

    Args:
        questions: Pool of validated questions
        count: Number of questions wanted
        rng: Random source (injectable for reproducible tests)

    Returns:
        Selected questions, without duplicates
    """
    rng = rng or random.Random()

    by_area: Dict[str, List[Question]] = {area: [] for area in POLICY_AREAS}
    for question in questions:
        if question.policy_area in by_area:
            by_area[question.policy_area].append(question)

    selected: List[Question] = []
    for area_questions in by_area.values():
        if area_questions and len(selected) < count:
            selected.append(area_questions.pop(rng.randrange(len(area_questions))))

    remaining = count - len(selected)
    if remaining > 0:
        leftover = [q for area_questions in by_area.values() for q in area_questions]
        rng.shuffle(leftover)
        selected.extend(leftover[:remaining])

    rng.shuffle(selected)
    return selected
