import asyncio
import logging

import pytest

from faq_assistant.engines import ranker as ranker_module
from faq_assistant.engines.ranker import CandidateRanker, candidate_ranker
from faq_assistant.engines.topic_grouper import TopicGrouper
from faq_assistant.schemas import Question


def _q(text, answer="respuesta"):
    return Question(question=text, answer=answer)


@pytest.fixture
def fixed_scores(monkeypatch):
    """Replace the scorer with a lookup by question text."""
    scores = {}
    monkeypatch.setattr(
        ranker_module,
        "question_similarity",
        lambda query, question, thematic=None: scores[question.question],
    )
    return scores


class TestRank:
    def test_empty_bank(self):
        assert candidate_ranker.rank("cualquier cosa", []) == []

    def test_single_matching_question(self, exam_question):
        assert candidate_ranker.rank("cuando sera el examen", [exam_question]) == [exam_question]

    def test_unrelated_bank_filtered_out(self):
        bank = [_q("abc", "def"), _q("ghi", "jkl")]
        assert candidate_ranker.rank("xyz", bank) == []

    def test_at_most_two_per_topic(self):
        bank = [
            _q("examen final de fisica"),
            _q("examen final de matematicas"),
            _q("examen final de quimica"),
            _q("examen final de historia"),
        ]
        result = candidate_ranker.rank("examen final de matematicas", bank)
        assert len(result) == 2
        assert result[0].question == "examen final de matematicas"

    def test_at_most_five_results(self):
        grouper = TopicGrouper({"a": ("alfa",), "b": ("beta",), "c": ("gamma",)})
        ranker = CandidateRanker(grouper=grouper)
        bank = [
            _q(f"pregunta {topic} {n}")
            for topic in ("alfa", "beta", "gamma")
            for n in ("uno", "dos")
        ]
        scored = ranker.rank_scored("pregunta", bank)
        assert len(scored) == 5
        assert all(item.similarity > 0.2 for item in scored)

    def test_returns_question_values(self, exam_question):
        result = candidate_ranker.rank("cuando sera el examen", [exam_question])
        assert isinstance(result[0], Question)
        assert not hasattr(result[0], "similarity")


class TestSelectionPolicy:
    def test_threshold_is_strict(self, fixed_scores):
        fixed_scores.update({"clase a": 0.2, "examen b": 0.2000001})
        result = candidate_ranker.rank("q", [_q("clase a"), _q("examen b")])
        assert [q.question for q in result] == ["examen b"]

    def test_bucket_cut_happens_before_merge(self, fixed_scores):
        fixed_scores.update({
            "examen 1": 0.9,
            "examen 2": 0.8,
            "examen 3": 0.7,
            "otra": 0.3,
        })
        bank = [_q("examen 3"), _q("otra"), _q("examen 1"), _q("examen 2")]
        result = candidate_ranker.rank("q", bank)
        assert [q.question for q in result] == ["examen 1", "examen 2", "otra"]

    def test_ties_keep_store_order(self, fixed_scores):
        fixed_scores.update({"clase x": 0.5, "clase y": 0.5, "otra z": 0.5})
        bank = [_q("clase y"), _q("otra z"), _q("clase x")]
        result = candidate_ranker.rank("q", bank)
        assert [q.question for q in result] == ["clase y", "clase x", "otra z"]

    def test_custom_limits(self, fixed_scores):
        fixed_scores.update({"a": 0.9, "b": 0.8, "c": 0.7, "d": 0.35})
        ranker = CandidateRanker(min_similarity=0.4, per_topic=3, max_results=2)
        result = ranker.rank("q", [_q("a"), _q("b"), _q("c"), _q("d")])
        assert [q.question for q in result] == ["a", "b"]


class TestFindSimilarQuestions:
    def test_fetches_fresh_snapshot_each_call(self, make_db, exam_question):
        db = make_db(questions=[exam_question])
        first = asyncio.run(candidate_ranker.find_similar_questions("cuando sera el examen", db))
        db.questions = []
        second = asyncio.run(candidate_ranker.find_similar_questions("cuando sera el examen", db))

        assert first == [exam_question]
        assert second == []
        assert db.fetch_calls == 2

    def test_fetch_failure_returns_empty(self, make_db, caplog):
        db = make_db(fail_questions=True)
        with caplog.at_level(logging.ERROR):
            result = asyncio.run(candidate_ranker.find_similar_questions("examen", db))
        assert result == []
        assert "Error fetching questions" in caplog.text
