"""
Tests for SimilarityCalculator and AlignmentScorer.
"""
import pytest

from core.matcher import SimilarityCalculator, AlignmentScorer, AgreementAnswer, ChoiceAnswer
from core.matcher.similarity import agreement_direction
from tests.mocks.catalog import (
    agreement_question,
    choice_question,
    position,
    opposite,
    X_AXIS,
    Y_AXIS,
)


class TestSimilarityCalculator:

    def test_parallel_vectors(self):
        assert SimilarityCalculator.cosine([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)

    def test_opposite_vectors(self):
        assert SimilarityCalculator.cosine(X_AXIS, opposite(X_AXIS)) == pytest.approx(-1.0)

    def test_orthogonal_vectors(self):
        assert SimilarityCalculator.cosine(X_AXIS, Y_AXIS) == pytest.approx(0.0)

    def test_zero_vector_is_zero_similarity(self):
        assert SimilarityCalculator.cosine([0.0, 0.0, 0.0], X_AXIS) == 0.0

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            SimilarityCalculator.cosine([1.0, 0.0], X_AXIS)


class TestAgreementDirection:

    @pytest.mark.parametrize("value, expected", [
        (1, -1.0),
        (2, -0.5),
        (3, 0.0),
        (4, 0.5),
        (5, 1.0),
    ])
    def test_scale_mapping(self, value, expected):
        assert agreement_direction(value) == pytest.approx(expected)


class TestAlignmentScorer:

    @pytest.fixture
    def scorer(self):
        return AlignmentScorer()

    def test_strong_agreement_with_aligned_position(self, scorer):
        score = scorer.score(AgreementAnswer("q1", 5), agreement_question("q1"), position("c1", "economy", X_AXIS))

        assert score == pytest.approx(1.0)

    def test_strong_agreement_with_opposed_position(self, scorer):
        score = scorer.score(
            AgreementAnswer("q1", 5),
            agreement_question("q1"),
            position("c1", "economy", opposite(X_AXIS))
        )

        assert score == pytest.approx(0.0)

    def test_disagreement_with_opposed_position_aligns(self, scorer):
        score = scorer.score(
            AgreementAnswer("q1", 1),
            agreement_question("q1"),
            position("c1", "economy", opposite(X_AXIS))
        )

        assert score == pytest.approx(1.0)

    def test_neutral_answer_is_midpoint(self, scorer):
        score = scorer.score(AgreementAnswer("q1", 3), agreement_question("q1"), position("c1", "economy", X_AXIS))

        assert score == pytest.approx(0.5)

    def test_unrelated_position_is_midpoint(self, scorer):
        score = scorer.score(AgreementAnswer("q1", 5), agreement_question("q1"), position("c1", "economy", Y_AXIS))

        assert score == pytest.approx(0.5)

    def test_choice_matching_documented_stance(self, scorer):
        question = choice_question("q2")
        score = scorer.score(
            ChoiceAnswer("q2", "optionB"),
            question,
            position("c1", "healthcare", Y_AXIS, stances={"q2": " OptionB "})
        )

        assert score == pytest.approx(1.0)

    def test_choice_differing_from_documented_stance(self, scorer):
        score = scorer.score(
            ChoiceAnswer("q2", "optionB"),
            choice_question("q2"),
            position("c1", "healthcare", Y_AXIS, stances={"q2": "optionA"})
        )

        assert score == pytest.approx(0.0)

    def test_choice_ignores_negative_relevance(self, scorer):
        score = scorer.score(
            ChoiceAnswer("q2", "optionB"),
            choice_question("q2"),
            position("c1", "healthcare", opposite(Y_AXIS), stances={"q2": "optionB"})
        )

        assert score == pytest.approx(0.5)

    def test_choice_without_stance_is_not_scored(self, scorer):
        score = scorer.score(
            ChoiceAnswer("q2", "optionB"),
            choice_question("q2"),
            position("c1", "healthcare", Y_AXIS)
        )

        assert score is None

    def test_embedding_size_mismatch_is_not_scored(self, scorer):
        score = scorer.score(
            AgreementAnswer("q1", 5),
            agreement_question("q1"),
            position("c1", "economy", [1.0, 0.0])
        )

        assert score is None

    def test_score_is_bounded(self, scorer):
        question = agreement_question("q1", embedding=[0.3, -0.7, 0.2])
        for value in range(1, 6):
            for emb in ([0.9, 0.1, -0.4], [-0.2, 0.8, 0.5], [0.0, 0.0, 0.0]):
                score = scorer.score(AgreementAnswer("q1", value), question, position("c1", "economy", emb))
                assert 0.0 <= score <= 1.0
