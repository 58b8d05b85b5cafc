"""
Tests for quiz question selection.
"""
import random
import unittest

from core.matcher import POLICY_AREAS, select_questions
from tests.mocks.catalog import agreement_question


def _pool(per_area=3, areas=POLICY_AREAS):
    return [
        agreement_question(f"{area}-{i}", policy_area=area)
        for area in areas
        for i in range(per_area)
    ]


class TestSelectQuestions(unittest.TestCase):

    def test_covers_every_area_when_count_allows(self):
        selected = select_questions(_pool(), 10, rng=random.Random(7))

        self.assertEqual(len(selected), 10)
        self.assertEqual({q.policy_area for q in selected}, set(POLICY_AREAS))

    def test_no_duplicates(self):
        selected = select_questions(_pool(), 15, rng=random.Random(3))

        ids = [q.question_id for q in selected]
        self.assertEqual(len(ids), len(set(ids)))

    def test_count_below_area_count(self):
        selected = select_questions(_pool(), 3, rng=random.Random(1))

        self.assertEqual(len(selected), 3)
        self.assertEqual(len({q.policy_area for q in selected}), 3)

    def test_pool_smaller_than_count_returns_whole_pool(self):
        pool = _pool(per_area=1, areas=("economy", "social"))

        selected = select_questions(pool, 20, rng=random.Random(5))

        self.assertEqual(sorted(q.question_id for q in selected), sorted(q.question_id for q in pool))

    def test_reproducible_with_seeded_rng(self):
        first = select_questions(_pool(), 8, rng=random.Random(42))
        second = select_questions(_pool(), 8, rng=random.Random(42))

        self.assertEqual([q.question_id for q in first], [q.question_id for q in second])

    def test_input_pool_is_not_mutated(self):
        pool = _pool()
        before = [q.question_id for q in pool]

        select_questions(pool, 5, rng=random.Random(9))

        self.assertEqual([q.question_id for q in pool], before)


if __name__ == '__main__':
    unittest.main()
