"""
Tests for CatalogValidator.

Covers structural answer checks, typed answer resolution and catalog
filtering. Malformed records are dropped and counted, never raised.
"""
import math
import pytest

from core.matcher import CatalogValidator, AgreementAnswer, ChoiceAnswer, UserAnswer
from tests.mocks.catalog import agreement_question, choice_question, position, X_AXIS


class TestAnswerFiltering:

    def test_keeps_well_formed_answers(self, validator):
        answers, report = validator.filter_answers([
            {"question_id": "q1", "answer": 4},
            {"question_id": "q2", "answer": "optionA"},
        ])

        assert [a.question_id for a in answers] == ["q1", "q2"]
        assert report.total == 2
        assert report.valid == 2
        assert report.dropped == 0

    def test_accepts_camel_case_question_id(self, validator):
        answers, _ = validator.filter_answers([{"questionId": "q1", "answer": 3}])

        assert answers == [UserAnswer(question_id="q1", answer=3)]

    @pytest.mark.parametrize("raw", [
        {"answer": 3},
        {"question_id": "", "answer": 3},
        {"question_id": "q1"},
        {"question_id": "q1", "answer": None},
        {"question_id": "q1", "answer": True},
        {"question_id": "q1", "answer": "   "},
        {"question_id": "q1", "answer": float("nan")},
        {"question_id": "q1", "answer": 10 ** 400},
        {"question_id": 7, "answer": 3},
        "q1=3",
        None,
    ])
    def test_drops_malformed_answer(self, validator, raw):
        answers, report = validator.filter_answers([raw, {"question_id": "ok", "answer": 2}])

        assert [a.question_id for a in answers] == ["ok"]
        assert report.dropped == 1
        assert not report.all_invalid

    def test_all_invalid_report(self, validator):
        answers, report = validator.filter_answers([{"answer": 1}, {}])

        assert answers == []
        assert report.all_invalid is True

    def test_empty_batch_is_not_all_invalid(self, validator):
        _, report = validator.filter_answers([])

        assert report.all_invalid is False


class TestAnswerResolution:

    def test_agreement_value_resolves_to_int(self, validator):
        resolved = validator.resolve_answer(UserAnswer("q1", 4), agreement_question("q1"))

        assert resolved == AgreementAnswer(question_id="q1", value=4)

    def test_agreement_numeric_string_and_integral_float(self, validator):
        question = agreement_question("q1")

        assert validator.resolve_answer(UserAnswer("q1", " 2 "), question).value == 2
        assert validator.resolve_answer(UserAnswer("q1", 5.0), question).value == 5

    @pytest.mark.parametrize("value", [0, 6, 4.5, "agree", "optionA", -1, 10 ** 400, "9" * 400])
    def test_agreement_out_of_domain(self, validator, value):
        assert validator.resolve_answer(UserAnswer("q1", value), agreement_question("q1")) is None

    def test_choice_option_resolves(self, validator):
        resolved = validator.resolve_answer(UserAnswer("q2", "optionB"), choice_question("q2"))

        assert resolved == ChoiceAnswer(question_id="q2", option="optionB")

    @pytest.mark.parametrize("value", ["optionZ", 2, "OPTIONB"])
    def test_choice_out_of_domain(self, validator, value):
        assert validator.resolve_answer(UserAnswer("q2", value), choice_question("q2")) is None

    def test_resolve_answers_drops_unknown_questions(self, validator):
        questions = {"q1": agreement_question("q1")}

        resolved = validator.resolve_answers(
            [UserAnswer("q1", 5), UserAnswer("missing", 5)],
            questions
        )

        assert len(resolved) == 1
        typed, question = resolved[0]
        assert typed.value == 5
        assert question.question_id == "q1"

    def test_resolve_answers_last_answer_wins(self, validator):
        questions = {"q1": agreement_question("q1")}

        resolved = validator.resolve_answers(
            [UserAnswer("q1", 1), UserAnswer("q1", 4)],
            questions
        )

        assert [typed.value for typed, _ in resolved] == [4]


class TestCatalogFiltering:

    def test_positions_from_dicts_are_coerced(self, validator):
        positions, report = validator.filter_positions([{
            "candidate_id": "c1",
            "policy_area": "economy",
            "embedding": [1, 0, 0],
            "name": "Alice",
            "party": "Party A",
            "stances": {"q2": "optionA"},
        }])

        assert report.valid == 1
        assert positions[0].embedding == [1.0, 0.0, 0.0]
        assert positions[0].stances == {"q2": "optionA"}
        assert positions[0].position == ""

    def test_non_mapping_stances_are_ignored(self, validator):
        positions, _ = validator.filter_positions([{
            "candidate_id": "c1",
            "policy_area": "economy",
            "embedding": [1, 0, 0],
            "stances": ["optionA"],
        }])

        assert positions[0].stances == {}

    @pytest.mark.parametrize("overrides", [
        {"candidate_id": ""},
        {"policy_area": "sports"},
        {"embedding": []},
        {"embedding": "1,0,0"},
        {"embedding": [1.0, math.inf, 0.0]},
        {"embedding": [1.0, 10 ** 400, 0.0]},
        {"embedding": [1.0, "x", 0.0]},
        {"embedding": None},
    ])
    def test_invalid_positions_dropped(self, validator, overrides):
        record = {"candidate_id": "c1", "policy_area": "economy", "embedding": [1.0, 0.0, 0.0]}
        record.update(overrides)

        positions, report = validator.filter_positions([record])

        assert positions == []
        assert report.all_invalid

    def test_embedding_dimension_enforced(self):
        strict = CatalogValidator(embedding_dimensions=4)

        positions, report = strict.filter_positions([position("c1", "economy", X_AXIS)])

        assert positions == []
        assert report.dropped == 1

    def test_valid_questions_pass_through(self, validator):
        questions, report = validator.filter_questions([agreement_question("q1"), choice_question("q2")])

        assert [q.question_id for q in questions] == ["q1", "q2"]
        assert report.valid == 2

    def test_invalid_questions_dropped(self, validator):
        no_options = choice_question("q3")
        no_options.options = []
        bad_type = agreement_question("q4")
        bad_type.type = "free-text"

        questions, report = validator.filter_questions([
            agreement_question("q1", weight=0),
            agreement_question("q2", weight=-1),
            agreement_question("q7", weight=10 ** 400),
            no_options,
            bad_type,
            agreement_question("q5", policy_area="unknown"),
            agreement_question("q6"),
        ])

        assert [q.question_id for q in questions] == ["q6"]
        assert report.dropped == 6

    def test_inputs_are_not_mutated(self, validator):
        records = [position("c1", "economy", X_AXIS), {"candidate_id": ""}]
        snapshot = list(records)

        validator.filter_positions(records)

        assert records == snapshot
